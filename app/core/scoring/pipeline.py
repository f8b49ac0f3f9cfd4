"""
Submission scoring pipeline: evaluate every answer, aggregate, name the
candidate and commit the result once.

The invitation decides which test is scored. Correct answers, options,
question text and point values come from that test's definition; the
client's copies are only used where the definition has none.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from app.core.scoring.aggregator import ScoreAggregator, round_half_up
from app.core.scoring.ai_judge import AIJudge
from app.core.scoring.committer import CommitOutcome, SubmissionCommitter
from app.core.scoring.evaluators import (
    AnswerEvaluator,
    CodingEvaluator,
    Evaluation,
    EvaluationContext,
    MultipleChoiceEvaluator,
    ScoredAnswer,
    UnscoredEvaluator,
    WrittenAnswerEvaluator,
)
from app.core.scoring.exceptions import (
    InvitationNotFoundError,
    InvitationTestMismatchError,
    UnknownTestError,
)
from app.core.scoring.name_resolver import CandidateNameResolver
from app.core.scoring.normalizer import is_blank
from app.models.assessment import AssessmentInvitation, AssessmentResult, AssessmentTest
from app.schemas.submission import (
    CODING,
    MULTIPLE_CHOICE,
    OTHER,
    WRITTEN_ANSWER,
    AnswerBase,
    SubmissionCreate,
    SubmittedAnswer,
)

logger = logging.getLogger(__name__)

# Single-attempt tests only
DEFAULT_ATTEMPT_NUMBER = 1

_answer_adapter = TypeAdapter(SubmittedAnswer)


@dataclass(frozen=True)
class QuestionReference:
    """A question as stored in the test definition."""

    question_id: str
    question_type: Optional[str] = None
    question_text: Optional[str] = None
    correct_answer: Any = None
    options: Optional[List[str]] = None
    points: Optional[int] = None


def _points(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        points = int(value)
    except (TypeError, ValueError):
        return None
    return points if points >= 0 else None


def question_references(test: Optional[AssessmentTest]) -> Dict[str, QuestionReference]:
    """Question id -> definition of that question, across all sections, in test order."""
    references: Dict[str, QuestionReference] = {}
    if test is None:
        return references
    for section in test.sections or []:
        for question in section.get("questions") or []:
            question_id = question.get("id")
            if question_id is None or str(question_id) in references:
                continue
            options = question.get("options")
            references[str(question_id)] = QuestionReference(
                question_id=str(question_id),
                question_type=question.get("type"),
                question_text=question.get("text") or question.get("question"),
                correct_answer=question.get("correctAnswer"),
                options=[str(option) for option in options] if options else None,
                points=_points(question.get("points")),
            )
    return references


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class SubmissionPipeline:
    """
    Scores and stores one submission.
    """

    def __init__(self, db: Session, judge: AIJudge):
        self.db = db
        self.evaluators: Dict[str, AnswerEvaluator] = {
            MULTIPLE_CHOICE: MultipleChoiceEvaluator(),
            WRITTEN_ANSWER: WrittenAnswerEvaluator(judge),
            CODING: CodingEvaluator(),
        }
        self.unscored = UnscoredEvaluator()
        self.name_resolver = CandidateNameResolver(db)
        self.committer = SubmissionCommitter(db)

    async def submit(self, payload: SubmissionCreate) -> CommitOutcome:
        """
        Run the whole pipeline for a submission.

        Raises:
            InvitationNotFoundError: If the invitation does not exist
            InvitationTestMismatchError: If the payload names another test than the invitation
            UnknownTestError: If the invitation's test definition does not exist
        """
        invitation = self.db.query(AssessmentInvitation).filter(
            AssessmentInvitation.id == payload.invitation_id
        ).first()
        if not invitation:
            raise InvitationNotFoundError(payload.invitation_id)

        if payload.test_id != invitation.test_id:
            logger.warning(
                f"Invitation {invitation.id} is for test {invitation.test_id}, "
                f"submission named test {payload.test_id}"
            )
            raise InvitationTestMismatchError(payload.test_id, invitation.test_id)

        test = self.db.query(AssessmentTest).filter(AssessmentTest.id == invitation.test_id).first()
        if test is None:
            raise UnknownTestError(invitation.test_id)

        references = question_references(test)
        answers = self.reconcile_answers(payload.answers, references)
        scored = await self.evaluate_answers(answers, references)

        passing_score = self._passing_score(test, payload)
        summary = ScoreAggregator(passing_score).aggregate(scored)

        candidate_name = self.name_resolver.resolve(
            student_id=invitation.student_id,  # type: ignore
            candidate_id=invitation.candidate_id,  # type: ignore
            email=invitation.email or payload.candidate_email,  # type: ignore
        )

        completion_date = datetime.now(timezone.utc)
        result = AssessmentResult(
            test_id=invitation.test_id,
            candidate_email=payload.candidate_email,
            invitation_token=invitation.token,
            attempt_number=DEFAULT_ATTEMPT_NUMBER,
            invitation_id=invitation.id,
            candidate_name=candidate_name,
            student_id=invitation.student_id,
            candidate_id=invitation.candidate_id,
            created_by=invitation.created_by,
            answers=[answer.to_record() for answer in scored],
            total_points=summary.total_points,
            earned_points=summary.earned_points,
            correct_answers=summary.correct_answers,
            score=summary.score,
            passing_score=passing_score,
            status=summary.status,
            started_at=payload.started_at,
            completion_date=completion_date,
            time_taken=self._time_taken(payload, completion_date),
            results_declared=False,
        )
        return self.committer.commit(result, invitation)

    def reconcile_answers(
        self, answers: List[AnswerBase], references: Dict[str, QuestionReference]
    ) -> List[AnswerBase]:
        """
        One answer per question: repeats of a question id are dropped and
        questions of the test left out of the submission are added blank.
        """
        seen = set()
        reconciled: List[AnswerBase] = []
        for answer in answers:
            if answer.question_id is not None:
                if answer.question_id in seen:
                    logger.warning(f"Ignoring repeated answer for question {answer.question_id}")
                    continue
                seen.add(answer.question_id)
            reconciled.append(answer)

        for question_id, reference in references.items():
            if question_id not in seen:
                reconciled.append(_answer_adapter.validate_python({
                    "questionId": question_id,
                    "questionType": reference.question_type or OTHER,
                    "questionText": reference.question_text or "",
                    "options": reference.options,
                    "maxPoints": reference.points or 0,
                }))
        return reconciled

    async def evaluate_answers(
        self, answers: List[AnswerBase], references: Dict[str, QuestionReference]
    ) -> List[ScoredAnswer]:
        """Evaluate all answers concurrently; returns once every one has resolved."""
        return list(await asyncio.gather(
            *(self._evaluate(answer, references) for answer in answers)
        ))

    async def _evaluate(self, answer: AnswerBase, references: Dict[str, QuestionReference]) -> ScoredAnswer:
        reference = references.get(answer.question_id) if answer.question_id else None
        answer = self._with_reference(answer, reference)

        authoritative = reference.correct_answer if reference else None
        # Keep the answer's own reference when the test has none
        correct_answer = authoritative if not is_blank(authoritative) else answer.correct_answer

        evaluator = self.evaluators.get(answer.question_type, self.unscored)
        try:
            evaluation = await evaluator.evaluate(answer, EvaluationContext(correct_answer=correct_answer))
        except Exception as e:
            logger.error(f"Evaluation of question {answer.question_id} failed: {e}")
            evaluation = Evaluation(points=0, is_correct=False)

        return ScoredAnswer(answer=answer, correct_answer=correct_answer, evaluation=evaluation)

    @staticmethod
    def _with_reference(answer: AnswerBase, reference: Optional[QuestionReference]) -> AnswerBase:
        if reference is None:
            return answer
        update: Dict[str, Any] = {}
        if reference.points is not None and reference.points != answer.max_points:
            update["max_points"] = reference.points
        if reference.options:
            update["options"] = reference.options
        if reference.question_text:
            update["question_text"] = reference.question_text
        return answer.model_copy(update=update) if update else answer

    @staticmethod
    def _passing_score(test: Optional[AssessmentTest], payload: SubmissionCreate) -> Optional[int]:
        if test is not None and test.passing_score is not None:
            return test.passing_score  # type: ignore
        return payload.passing_score

    @staticmethod
    def _time_taken(payload: SubmissionCreate, completion_date: datetime) -> Optional[int]:
        if payload.duration is not None:
            return payload.duration
        if payload.started_at is None:
            return None
        elapsed = (completion_date - _as_utc(payload.started_at)).total_seconds()
        return max(0, round_half_up(elapsed / 60))
