"""
Exactly-once persistence of assessment results.

The unique natural key (test, candidate email, invitation token, attempt)
decides which of several concurrent or retried submissions wins; losers
read back the winner's id.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.assessment import AssessmentCandidate, AssessmentInvitation, AssessmentResult

logger = logging.getLogger(__name__)

INVITATION_COMPLETED = "Completed"
CANDIDATE_COMPLETED = "Completed"


class CommitStatus(str, Enum):
    COMMITTED = "committed"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class CommitOutcome:
    status: CommitStatus
    result_id: Optional[int]

    @property
    def is_duplicate(self) -> bool:
        return self.status == CommitStatus.DUPLICATE


class SubmissionCommitter:
    """
    Inserts a result if its natural key is free, then completes the
    invitation and updates candidate stats.
    """

    def __init__(self, db: Session):
        self.db = db

    def commit(self, result: AssessmentResult, invitation: AssessmentInvitation) -> CommitOutcome:
        """
        Args:
            result: Fully scored, not yet persisted result
            invitation: Invitation the result was submitted for

        Returns:
            CommitOutcome, DUPLICATE when a result already holds the natural key
        """
        key = (result.test_id, result.candidate_email, result.invitation_token, result.attempt_number or 1)

        self.db.add(result)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing_id = self.find_existing_id(*key)
            if existing_id is None:
                raise
            logger.info(f"Duplicate submission for test {key[0]} by {key[1]}, existing result {existing_id}")
            return CommitOutcome(status=CommitStatus.DUPLICATE, result_id=existing_id)

        self.db.refresh(result)
        logger.info(
            f"Committed result {result.id} for test {result.test_id}: "
            f"score={result.score} status={result.status}"
        )

        self._complete_invitation(invitation)
        self._record_candidate_stats(result, invitation)

        return CommitOutcome(status=CommitStatus.COMMITTED, result_id=result.id)

    def find_existing_id(
        self, test_id: int, candidate_email: str, invitation_token: str, attempt_number: int = 1
    ) -> Optional[int]:
        existing = self.db.query(AssessmentResult.id).filter(
            AssessmentResult.test_id == test_id,
            AssessmentResult.candidate_email == candidate_email,
            AssessmentResult.invitation_token == invitation_token,
            AssessmentResult.attempt_number == attempt_number,
        ).first()
        return existing[0] if existing else None

    def _complete_invitation(self, invitation: AssessmentInvitation) -> None:
        try:
            invitation.status = INVITATION_COMPLETED  # type: ignore
            invitation.completed_at = datetime.now(timezone.utc)  # type: ignore
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to mark invitation {invitation.id} completed: {e}")

    def _record_candidate_stats(self, result: AssessmentResult, invitation: AssessmentInvitation) -> None:
        if not result.candidate_email:
            return
        try:
            self._upsert_candidate_stats(result, invitation)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update candidate stats for {result.candidate_email}: {e}")

    def _upsert_candidate_stats(self, result: AssessmentResult, invitation: AssessmentInvitation) -> None:
        now = datetime.now(timezone.utc)
        candidate = self.db.query(AssessmentCandidate).filter(
            AssessmentCandidate.email == result.candidate_email,
            AssessmentCandidate.created_by == invitation.created_by,
        ).first()

        # Pass/fail stays hidden until results are declared
        if candidate:
            candidate.tests_completed = AssessmentCandidate.tests_completed + 1  # type: ignore
            candidate.status = CANDIDATE_COMPLETED  # type: ignore
            candidate.last_completed_at = now  # type: ignore
            candidate.updated_at = now  # type: ignore
        else:
            self.db.add(AssessmentCandidate(
                name=result.candidate_name or result.candidate_email.split("@")[0],
                email=result.candidate_email,
                created_by=invitation.created_by,
                tests_assigned=1,
                tests_completed=1,
                average_score=result.score,
                status=CANDIDATE_COMPLETED,
                last_completed_at=now,
                updated_at=now,
            ))
