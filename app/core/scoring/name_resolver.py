"""
Display-name resolution for candidates across the student and candidate stores.
"""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.people import Candidate, Student

logger = logging.getLogger(__name__)

NAME_PARTS = ("salutation", "first_name", "middle_name", "last_name")


def email_local_part(email: Optional[str]) -> str:
    return (email or "").split("@")[0]


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def display_name(record: Any, email: Optional[str]) -> str:
    """Salutation + first + middle + last, else the record's name, else the email local part."""
    full_name = " ".join(part for part in (_clean(getattr(record, attr, None)) for attr in NAME_PARTS) if part)
    if full_name:
        return full_name
    name = _clean(getattr(record, "name", None))
    if name:
        return name
    return email_local_part(email)


def looks_auto_generated(name: Optional[str], email: Optional[str]) -> bool:
    """A stored name that is blank, the email itself, or its local part."""
    if not name or not name.strip():
        return True
    if not email:
        return False
    if name == email:
        return True
    return " " not in name and name == email_local_part(email)


class CandidateNameResolver:
    """
    Resolves a candidate name probing, in order: student by id, candidate
    by id, student by email, candidate by email.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_record(
        self,
        student_id: Optional[int] = None,
        candidate_id: Optional[int] = None,
        email: Optional[str] = None,
    ) -> Optional[Any]:
        if student_id is not None:
            record = self.db.query(Student).filter(Student.id == student_id).first()
            if record:
                return record
        if candidate_id is not None:
            record = self.db.query(Candidate).filter(Candidate.id == candidate_id).first()
            if record:
                return record
        if email:
            record = self.db.query(Student).filter(Student.email == email).first()
            if record:
                return record
            record = self.db.query(Candidate).filter(Candidate.email == email).first()
            if record:
                return record
        return None

    def resolve(
        self,
        student_id: Optional[int] = None,
        candidate_id: Optional[int] = None,
        email: Optional[str] = None,
    ) -> str:
        record = self.find_record(student_id=student_id, candidate_id=candidate_id, email=email)
        if record is None:
            logger.debug(f"No profile found for {email}, using email local part")
            return email_local_part(email)
        return display_name(record, email)

    def repair(self, result: Any) -> str:
        """
        Name to show for a stored result; re-resolves names that look
        auto-generated. Nothing is written back.
        """
        if not looks_auto_generated(result.candidate_name, result.candidate_email):
            return result.candidate_name
        return self.resolve(
            student_id=result.student_id,
            candidate_id=result.candidate_id,
            email=result.candidate_email,
        )
