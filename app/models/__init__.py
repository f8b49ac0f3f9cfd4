"""Models module - Import all models here for Alembic."""
from app.db.base import Base
from app.models.assessment import (
    AssessmentTest,
    AssessmentInvitation,
    AssessmentResult,
    AssessmentCandidate,
)
from app.models.people import Student, Candidate

__all__ = ["Base", "AssessmentTest", "AssessmentInvitation", "AssessmentResult", "AssessmentCandidate", "Student", "Candidate"]
