"""
Queries behind the result listings: filters, sorting and summary stats.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Query, Session

from app.core.scoring.aggregator import PASSED, round_half_up
from app.core.scoring.committer import INVITATION_COMPLETED
from app.core.scoring.name_resolver import CandidateNameResolver
from app.models.assessment import AssessmentInvitation, AssessmentResult
from app.schemas.result import ResultRead, ResultStats

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "completionDate": AssessmentResult.completion_date,
    "score": AssessmentResult.score,
    "createdAt": AssessmentResult.created_at,
}


def completion_window(
    date_filter: str, now: Optional[datetime] = None
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    [start, end) bounds on completion date for a date bucket. Weeks start on Sunday.
    """
    now = now or datetime.now(timezone.utc)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    month_start = today.replace(day=1)

    if date_filter == "Today":
        return today, today + timedelta(days=1)
    if date_filter == "This week":
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        return week_start, week_start + timedelta(days=7)
    if date_filter == "This month":
        next_month = (month_start + timedelta(days=32)).replace(day=1)
        return month_start, next_month
    if date_filter == "Older":
        return None, month_start
    return None, None


def apply_result_filters(
    query: Query,
    status: Optional[str] = None,
    score: Optional[str] = None,
    date: Optional[str] = None,
) -> Query:
    if status:
        query = query.filter(AssessmentResult.status == status)

    if score == "> 90%":
        query = query.filter(AssessmentResult.score > 90)
    elif score == "80-90%":
        query = query.filter(AssessmentResult.score >= 80, AssessmentResult.score <= 90)
    elif score == "70-80%":
        query = query.filter(AssessmentResult.score >= 70, AssessmentResult.score < 80)
    elif score == "< 70%":
        query = query.filter(AssessmentResult.score < 70)

    if date:
        start, end = completion_window(date)
        if start is not None:
            query = query.filter(AssessmentResult.completion_date >= start)
        if end is not None:
            query = query.filter(AssessmentResult.completion_date < end)

    return query


def list_results(
    db: Session,
    created_by: int,
    test_id: Optional[int] = None,
    status: Optional[str] = None,
    score: Optional[str] = None,
    date: Optional[str] = None,
    sort: str = "completionDate",
    limit: Optional[int] = None,
) -> List[AssessmentResult]:
    query = db.query(AssessmentResult).filter(AssessmentResult.created_by == created_by)
    if test_id is not None:
        query = query.filter(AssessmentResult.test_id == test_id)
    query = apply_result_filters(query, status=status, score=score, date=date)

    sort_column = SORT_COLUMNS.get(sort, AssessmentResult.completion_date)
    query = query.order_by(sort_column.desc(), AssessmentResult.id.desc())
    if limit:
        query = query.limit(limit)
    results = query.all()

    logger.info(
        f"Listed {len(results)} results for employee {created_by} "
        f"(test={test_id}, status={status}, score={score}, date={date}, sort={sort})"
    )
    return results


def result_stats(
    db: Session,
    results: List[AssessmentResult],
    created_by: int,
    test_id: Optional[int] = None,
) -> ResultStats:
    """Average score and pass rate over the results, completion rate over invitations."""
    average_score = 0
    pass_rate = 0
    if results:
        average_score = round_half_up(sum(r.score or 0 for r in results) / len(results))
        passed = sum(1 for r in results if r.status == PASSED)
        pass_rate = round_half_up(passed / len(results) * 100)

    invitations = db.query(AssessmentInvitation).filter(AssessmentInvitation.created_by == created_by)
    if test_id is not None:
        invitations = invitations.filter(AssessmentInvitation.test_id == test_id)
    total_invitations = invitations.count()
    completed = invitations.filter(AssessmentInvitation.status == INVITATION_COMPLETED).count()
    completion_rate = round_half_up(completed / total_invitations * 100) if total_invitations > 0 else 0

    return ResultStats(average_score=average_score, pass_rate=pass_rate, completion_rate=completion_rate)


def to_result_read(result: AssessmentResult, resolver: CandidateNameResolver) -> ResultRead:
    """Serialize a result, showing a repaired name when the stored one looks auto-generated."""
    read = ResultRead.model_validate(result)
    return read.model_copy(update={"candidate_name": resolver.repair(result)})
