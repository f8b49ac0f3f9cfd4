"""
Per-question-type answer evaluators.

Every evaluator exposes ``evaluate(answer, context) -> Evaluation``. The
authoritative correct answer travels in the context by value; evaluators
never write to the submitted answer.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.scoring.aggregator import round_half_up
from app.core.scoring.ai_judge import AIJudge
from app.core.scoring.normalizer import is_blank, normalize_answer
from app.schemas.submission import AnswerBase, CodingTestResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluation:
    """Points decision for one answer."""
    points: int
    is_correct: Optional[bool]
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EvaluationContext:
    correct_answer: Any = None


@dataclass(frozen=True)
class ScoredAnswer:
    """A submitted answer paired with its reference answer and evaluation."""
    answer: AnswerBase
    correct_answer: Any
    evaluation: Evaluation

    @property
    def max_points(self) -> int:
        return self.answer.max_points

    @property
    def points(self) -> int:
        return self.evaluation.points

    @property
    def is_correct(self) -> Optional[bool]:
        return self.evaluation.is_correct

    def to_record(self) -> Dict[str, Any]:
        """Wire-format answer as stored on the result."""
        record = self.answer.model_dump(by_alias=True, exclude_none=True, mode="json")
        if self.correct_answer is not None:
            record["correctAnswer"] = self.correct_answer
        record["points"] = self.points
        record["isCorrect"] = self.is_correct
        record.update(self.evaluation.extras)
        return record


class AnswerEvaluator:
    """Base evaluator."""

    async def evaluate(self, answer: AnswerBase, context: EvaluationContext) -> Evaluation:
        raise NotImplementedError


class MultipleChoiceEvaluator(AnswerEvaluator):
    """
    Full or zero credit for choice questions.

    With options present, the submitted and correct answers must resolve to
    the same option index; two options that normalize to the same text are
    still different choices.
    """

    async def evaluate(self, answer: AnswerBase, context: EvaluationContext) -> Evaluation:
        return self.grade(answer.answer, context.correct_answer, answer.options, answer.max_points)

    def grade(
        self,
        submitted: Any,
        correct: Any,
        options: Optional[List[str]],
        max_points: int,
    ) -> Evaluation:
        if is_blank(submitted) or is_blank(correct):
            return Evaluation(points=0, is_correct=False)

        if options:
            matched = self._same_option(submitted, correct, options)
        else:
            matched = normalize_answer(submitted) == normalize_answer(correct)

        if matched:
            return Evaluation(points=max_points, is_correct=True)
        return Evaluation(points=0, is_correct=False)

    def _same_option(self, submitted: Any, correct: Any, options: List[str]) -> bool:
        normalized_options = [normalize_answer(option) for option in options]
        submitted_indices = self._option_indices(submitted, normalized_options)
        correct_indices = self._option_indices(correct, normalized_options)
        if submitted_indices is None or correct_indices is None:
            return False
        return submitted_indices == correct_indices

    def _option_indices(self, value: Any, normalized_options: List[Any]) -> Optional[List[int]]:
        values = value if isinstance(value, (list, tuple)) else [value]
        indices = []
        for item in values:
            index = self._option_index(item, normalized_options)
            if index is None:
                return None
            indices.append(index)
        return sorted(indices)

    @staticmethod
    def _option_index(value: Any, normalized_options: List[Any]) -> Optional[int]:
        # Integers are option positions, not option text
        if isinstance(value, int) and not isinstance(value, bool):
            return value if 0 <= value < len(normalized_options) else None
        try:
            return normalized_options.index(normalize_answer(value))
        except ValueError:
            return None


class WrittenAnswerEvaluator(AnswerEvaluator):
    """
    Scores free text through the AI judge. Judge scores below ``min_score``
    earn nothing; above it points scale linearly with the score.
    """

    def __init__(self, judge: AIJudge, min_score: Optional[int] = None):
        self.judge = judge
        self.min_score = min_score if min_score is not None else settings.AI_JUDGE_MIN_SCORE

    async def evaluate(self, answer: AnswerBase, context: EvaluationContext) -> Evaluation:
        text = answer.answer if isinstance(answer.answer, str) else ""
        if not text.strip():
            return Evaluation(points=0, is_correct=False)

        verdict = await self.judge.judge(answer.question_text or "", text)
        points = self.points_for(verdict.score, answer.max_points)
        return Evaluation(
            points=points,
            is_correct=points > 0,
            extras={"aiScore": verdict.score, "aiFeedback": verdict.feedback},
        )

    def points_for(self, ai_score: int, max_points: int) -> int:
        if ai_score < self.min_score:
            return 0
        return min(max_points, round_half_up(ai_score * max_points / 100))


class CodingEvaluator(AnswerEvaluator):
    """
    Proportional credit from hidden test cases. Correctness is left
    undecided; coding answers do not count towards correct answers.
    """

    async def evaluate(self, answer: AnswerBase, context: EvaluationContext) -> Evaluation:
        results = getattr(answer, "coding_test_results", None) or []
        return Evaluation(points=self.points_for(results, answer.max_points), is_correct=None)

    @staticmethod
    def points_for(results: List[CodingTestResult], max_points: int) -> int:
        total = len(results)
        if total == 0:
            return 0
        passed = sum(1 for result in results if result.passed)
        return round_half_up(passed * max_points / total)


class UnscoredEvaluator(AnswerEvaluator):
    """Question types without grading rules earn nothing."""

    async def evaluate(self, answer: AnswerBase, context: EvaluationContext) -> Evaluation:
        logger.warning(f"No evaluator for question type '{answer.question_type}', awarding 0 points")
        return Evaluation(points=0, is_correct=False)
