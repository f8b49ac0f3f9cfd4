"""
Pydantic schemas for assessment submissions.

Answers are a tagged union keyed by ``questionType``; unknown tags are
accepted as unscored answers instead of failing validation.
"""
from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Discriminator, Field, Tag, field_validator

from app.schemas.common import WireModel

MULTIPLE_CHOICE = "Multiple Choice"
WRITTEN_ANSWER = "Written Answer"
CODING = "Coding"
OTHER = "Other"

SCORED_QUESTION_TYPES = (MULTIPLE_CHOICE, WRITTEN_ANSWER, CODING)


class CodingTestResult(WireModel):
    """Outcome of one hidden test case for a coding answer."""

    input: Optional[Any] = None
    expected_output: Optional[Any] = None
    actual_output: Optional[Any] = None
    passed: bool = False
    error: Optional[str] = None


class AnswerBase(WireModel):
    """Fields shared by every answer variant."""

    question_id: Optional[str] = None
    question_type: str
    question_text: Optional[str] = ""
    answer: Optional[Any] = None
    correct_answer: Optional[Any] = None
    options: Optional[List[str]] = None
    max_points: int = Field(default=0, ge=0)

    @field_validator("question_id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        """Question ids arrive as strings or integers."""
        if v is None:
            return v
        return str(v)

    @field_validator("question_text", mode="before")
    @classmethod
    def text_or_empty(cls, v):
        return "" if v is None else v


class MultipleChoiceAnswer(AnswerBase):
    question_type: Literal["Multiple Choice"]


class WrittenAnswer(AnswerBase):
    question_type: Literal["Written Answer"]


class CodingAnswer(AnswerBase):
    question_type: Literal["Coding"]
    coding_test_results: List[CodingTestResult] = Field(default_factory=list)


class UnscoredAnswer(AnswerBase):
    """Answer of a type this pipeline does not grade."""


def _question_type_tag(value: Any) -> str:
    if isinstance(value, dict):
        qtype = value.get("questionType", value.get("question_type"))
    else:
        qtype = getattr(value, "question_type", None)
    return qtype if qtype in SCORED_QUESTION_TYPES else OTHER


SubmittedAnswer = Annotated[
    Union[
        Annotated[MultipleChoiceAnswer, Tag(MULTIPLE_CHOICE)],
        Annotated[WrittenAnswer, Tag(WRITTEN_ANSWER)],
        Annotated[CodingAnswer, Tag(CODING)],
        Annotated[UnscoredAnswer, Tag(OTHER)],
    ],
    Discriminator(_question_type_tag),
]


class SubmissionCreate(WireModel):
    """Schema for submitting a completed test."""

    invitation_id: int
    test_id: int
    candidate_email: str = Field(..., min_length=1)
    started_at: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=0, description="Time taken in minutes")
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)
    answers: List[SubmittedAnswer] = Field(default_factory=list)
