"""
Assessment models: test definitions, invitations, results and per-candidate stats.
"""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class AssessmentTest(Base):
    """Test definition - source of truth for correct answers."""

    __tablename__ = "assessment_tests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    passing_score = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)  # Minutes
    # [{"title": ..., "questions": [{"id", "type", "text", "options", "correctAnswer", "points"}]}]
    sections = Column(JSON, nullable=False, default=list)
    created_by = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    invitations = relationship("AssessmentInvitation", back_populates="test")


class AssessmentInvitation(Base):
    """Invitation for a candidate to take a test."""

    __tablename__ = "assessment_invitations"

    id = Column(Integer, primary_key=True, index=True)
    test_id = Column(Integer, ForeignKey("assessment_tests.id"), nullable=False)
    email = Column(String, nullable=False, index=True)
    token = Column(String, unique=True, index=True, nullable=False)
    status = Column(String, default="Pending")  # Pending, Completed, Cancelled, Expired
    created_by = Column(Integer, nullable=False, index=True)
    student_id = Column(Integer, nullable=True)
    candidate_id = Column(Integer, nullable=True)

    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    test = relationship("AssessmentTest", back_populates="invitations")


class AssessmentResult(Base):
    """Result of one candidate's completed attempt. Written once per natural key."""

    __tablename__ = "assessment_results"
    __table_args__ = (
        UniqueConstraint(
            "test_id",
            "candidate_email",
            "invitation_token",
            "attempt_number",
            name="uq_assessment_result_natural_key",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    test_id = Column(Integer, nullable=False, index=True)
    candidate_email = Column(String, nullable=False, index=True)
    invitation_token = Column(String, nullable=False)
    attempt_number = Column(Integer, nullable=False, default=1)
    invitation_id = Column(Integer, nullable=True)

    candidate_name = Column(String, nullable=True)
    student_id = Column(Integer, nullable=True)
    candidate_id = Column(Integer, nullable=True)
    created_by = Column(Integer, nullable=True, index=True)

    answers = Column(JSON, nullable=False, default=list)  # Evaluated answers, wire format
    total_points = Column(Integer, default=0)
    earned_points = Column(Integer, default=0)
    correct_answers = Column(Integer, default=0)
    score = Column(Integer, default=0)  # 0-100
    passing_score = Column(Integer, nullable=True)
    status = Column(String, nullable=False)  # Passed, Failed

    started_at = Column(DateTime(timezone=True), nullable=True)
    completion_date = Column(DateTime(timezone=True), nullable=True)
    time_taken = Column(Integer, nullable=True)  # Minutes
    results_declared = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AssessmentCandidate(Base):
    """Aggregated per-candidate statistics for an employee."""

    __tablename__ = "assessment_candidates"
    __table_args__ = (
        UniqueConstraint("email", "created_by", name="uq_assessment_candidate_owner"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, index=True)
    created_by = Column(Integer, nullable=False)
    name = Column(String, nullable=True)

    tests_assigned = Column(Integer, default=0)
    tests_completed = Column(Integer, default=0)
    average_score = Column(Float, nullable=True)
    status = Column(String, nullable=True)

    last_completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
