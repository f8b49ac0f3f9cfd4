"""
Assessment submission scoring modules.
"""
from .ai_judge import AIJudge, JudgeOutcome, JudgeVerdict
from .aggregator import ScoreAggregator, ScoreSummary
from .committer import CommitOutcome, CommitStatus, SubmissionCommitter
from .evaluators import (
    CodingEvaluator,
    MultipleChoiceEvaluator,
    WrittenAnswerEvaluator,
)
from .exceptions import (
    InvitationNotFoundError,
    InvitationTestMismatchError,
    ScoringError,
    UnknownTestError,
)
from .name_resolver import CandidateNameResolver
from .pipeline import SubmissionPipeline

__all__ = [
    "AIJudge",
    "JudgeOutcome",
    "JudgeVerdict",
    "ScoreAggregator",
    "ScoreSummary",
    "CommitOutcome",
    "CommitStatus",
    "SubmissionCommitter",
    "CodingEvaluator",
    "MultipleChoiceEvaluator",
    "WrittenAnswerEvaluator",
    "InvitationNotFoundError",
    "InvitationTestMismatchError",
    "UnknownTestError",
    "ScoringError",
    "CandidateNameResolver",
    "SubmissionPipeline",
]
