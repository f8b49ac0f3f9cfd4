"""
Reduction of evaluated answers into the final score of a submission.
"""
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from app.core.config import settings

PASSED = "Passed"
FAILED = "Failed"


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go up)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoreSummary:
    total_points: int
    earned_points: int
    correct_answers: int
    score: int
    status: str


class ScoreAggregator:
    """
    Sums points over scored answers and derives percentage and pass/fail.
    Knows nothing about question types.
    """

    def __init__(self, passing_score: Optional[int] = None):
        self.passing_score = (
            passing_score if passing_score is not None else settings.DEFAULT_PASSING_SCORE
        )

    def aggregate(self, answers: Iterable[Any]) -> ScoreSummary:
        """
        Args:
            answers: Items exposing ``max_points``, ``points`` and ``is_correct``

        Returns:
            ScoreSummary
        """
        total_points = 0
        earned_points = 0
        correct_answers = 0
        for answer in answers:
            total_points += answer.max_points or 0
            earned_points += answer.points or 0
            if answer.is_correct is True:
                correct_answers += 1

        score = round_half_up(earned_points * 100 / total_points) if total_points > 0 else 0
        status = PASSED if score >= self.passing_score else FAILED

        return ScoreSummary(
            total_points=total_points,
            earned_points=earned_points,
            correct_answers=correct_answers,
            score=score,
            status=status,
        )
