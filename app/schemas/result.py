"""
Pydantic schemas for assessment results.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict

from app.schemas.common import WireModel


class SubmissionCreated(WireModel):
    """Returned when a submission was committed."""

    success: bool = True
    result_id: int


class SubmissionConflict(WireModel):
    """Returned when a result already exists for the invitation."""

    success: bool = False
    message: str
    result_id: Optional[int] = None


class ResultRead(WireModel):
    """Stored result as shown to employees."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    test_id: int
    invitation_id: Optional[int] = None
    candidate_name: Optional[str] = None
    candidate_email: str
    student_id: Optional[int] = None
    candidate_id: Optional[int] = None
    attempt_number: int = 1
    answers: List[Dict[str, Any]] = []
    total_points: int = 0
    earned_points: int = 0
    correct_answers: int = 0
    score: int = 0
    status: str
    started_at: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    time_taken: Optional[int] = None
    results_declared: bool = False
    created_at: Optional[datetime] = None


class ResultStats(WireModel):
    average_score: int = 0
    pass_rate: int = 0
    completion_rate: int = 0


class ResultListResponse(WireModel):
    success: bool = True
    results: List[ResultRead]
    stats: ResultStats
    test_name: Optional[str] = None


class TestSummary(WireModel):
    id: int
    name: str
    passing_score: Optional[int] = None
    total_questions: int = 0


class ResultDetailResponse(WireModel):
    success: bool = True
    result: ResultRead
    test: Optional[TestSummary] = None
