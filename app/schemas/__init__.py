"""Schemas module - Import all schemas."""
from app.schemas.common import WireModel, ErrorResponse
from app.schemas.submission import (
    SubmissionCreate,
    SubmittedAnswer,
    MultipleChoiceAnswer,
    WrittenAnswer,
    CodingAnswer,
    UnscoredAnswer,
    CodingTestResult,
)
from app.schemas.result import (
    SubmissionCreated,
    SubmissionConflict,
    ResultRead,
    ResultStats,
    ResultListResponse,
    ResultDetailResponse,
)

__all__ = [
    "WireModel",
    "ErrorResponse",
    "SubmissionCreate",
    "SubmittedAnswer",
    "MultipleChoiceAnswer",
    "WrittenAnswer",
    "CodingAnswer",
    "UnscoredAnswer",
    "CodingTestResult",
    "SubmissionCreated",
    "SubmissionConflict",
    "ResultRead",
    "ResultStats",
    "ResultListResponse",
    "ResultDetailResponse",
]
