"""
API endpoints for assessment results - submitting a completed test and reviewing results.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.dependencies import get_ai_judge, get_current_employee_id
from app.core.scoring import (
    AIJudge,
    CandidateNameResolver,
    InvitationNotFoundError,
    InvitationTestMismatchError,
    SubmissionPipeline,
    UnknownTestError,
)
from app.db.base import get_db
from app.models.assessment import AssessmentResult, AssessmentTest
from app.schemas.common import ErrorResponse
from app.schemas.result import (
    ResultDetailResponse,
    ResultListResponse,
    SubmissionConflict,
    SubmissionCreated,
    TestSummary,
)
from app.schemas.submission import SubmissionCreate
from app.services.results import list_results, result_stats, to_result_read

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_MESSAGE = "Result already submitted for this invitation"


@router.post(
    "/results",
    response_model=SubmissionCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": SubmissionConflict},
    },
)
async def submit_result(
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    judge: AIJudge = Depends(get_ai_judge),
) -> Any:
    """
    Submit a completed test.

    Every answer is scored server-side: choice questions against the test
    definition, written answers by the AI judge, coding questions by passed
    test cases. A second submission for the same invitation returns 409 with
    the id of the stored result.
    """
    try:
        outcome = await SubmissionPipeline(db, judge).submit(payload)
    except InvitationNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
    except InvitationTestMismatchError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Test does not match invitation"
        )
    except UnknownTestError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test not found")
    except Exception as e:
        logger.error(f"Error creating result: {e}")
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create result"
        )

    if outcome.is_duplicate:
        conflict = SubmissionConflict(message=DUPLICATE_MESSAGE, result_id=outcome.result_id)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=conflict.model_dump(by_alias=True),
        )

    return SubmissionCreated(result_id=outcome.result_id)  # type: ignore


@router.get("/results", response_model=ResultListResponse)
def get_results(
    test: Optional[int] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    score: Optional[str] = None,
    date: Optional[str] = None,
    limit: Optional[int] = None,
    sort: str = "completionDate",
    db: Session = Depends(get_db),
    employee_id: int = Depends(get_current_employee_id),
) -> Any:
    """
    List results of the current employee's tests.

    Filters: ``test`` id, ``status`` (Passed/Failed), ``score`` bucket
    ("> 90%", "80-90%", "70-80%", "< 70%") and ``date`` bucket
    ("Today", "This week", "This month", "Older").
    """
    results = list_results(
        db, employee_id, test_id=test, status=status_filter, score=score, date=date, sort=sort, limit=limit
    )
    resolver = CandidateNameResolver(db)
    return ResultListResponse(
        results=[to_result_read(result, resolver) for result in results],
        stats=result_stats(db, results, employee_id),
    )


@router.get(
    "/results/{result_id}",
    response_model=ResultDetailResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def get_result(
    result_id: int,
    db: Session = Depends(get_db),
    employee_id: int = Depends(get_current_employee_id),
) -> Any:
    """
    Get one result with its test summary.
    """
    result = db.query(AssessmentResult).filter(
        AssessmentResult.id == result_id,
        AssessmentResult.created_by == employee_id
    ).first()
    if not result:
        raise HTTPException(status_code=404, detail="Result not found")

    test = db.query(AssessmentTest).filter(AssessmentTest.id == result.test_id).first()
    summary = None
    if test:
        total_questions = sum(len(section.get("questions") or []) for section in test.sections or [])
        summary = TestSummary(
            id=test.id,  # type: ignore
            name=test.name,  # type: ignore
            passing_score=test.passing_score,  # type: ignore
            total_questions=total_questions,
        )

    return ResultDetailResponse(
        result=to_result_read(result, CandidateNameResolver(db)),
        test=summary,
    )


@router.get(
    "/tests/{test_id}/results",
    response_model=ResultListResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def get_test_results(
    test_id: int,
    status_filter: Optional[str] = Query(None, alias="status"),
    score: Optional[str] = None,
    date: Optional[str] = None,
    limit: Optional[int] = None,
    sort: str = "completionDate",
    db: Session = Depends(get_db),
    employee_id: int = Depends(get_current_employee_id),
) -> Any:
    """
    List results of one test owned by the current employee.
    """
    test = db.query(AssessmentTest).filter(
        AssessmentTest.id == test_id,
        AssessmentTest.created_by == employee_id
    ).first()
    if not test:
        raise HTTPException(status_code=404, detail="Test not found")

    results = list_results(
        db, employee_id, test_id=test_id, status=status_filter, score=score, date=date, sort=sort, limit=limit
    )
    resolver = CandidateNameResolver(db)
    return ResultListResponse(
        results=[to_result_read(result, resolver) for result in results],
        stats=result_stats(db, results, employee_id, test_id=test_id),
        test_name=test.name,  # type: ignore
    )
