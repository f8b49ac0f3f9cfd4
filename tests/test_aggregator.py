from types import SimpleNamespace

from app.core.scoring.aggregator import FAILED, PASSED, ScoreAggregator, round_half_up


def scored(max_points, points, is_correct):
    return SimpleNamespace(max_points=max_points, points=points, is_correct=is_correct)


def test_sums_points_and_counts_correct_answers():
    summary = ScoreAggregator(passing_score=70).aggregate([
        scored(10, 10, True),
        scored(10, 0, False),
        scored(10, 8, None),
    ])
    assert summary.total_points == 30
    assert summary.earned_points == 18
    assert summary.correct_answers == 1
    assert summary.score == 60
    assert summary.status == FAILED


def test_pass_at_exact_threshold():
    summary = ScoreAggregator(passing_score=70).aggregate([scored(10, 7, True)])
    assert summary.score == 70
    assert summary.status == PASSED


def test_empty_submission_scores_zero_and_fails():
    summary = ScoreAggregator().aggregate([])
    assert summary.total_points == 0
    assert summary.score == 0
    assert summary.status == FAILED


def test_default_passing_score_is_70():
    assert ScoreAggregator().passing_score == 70
    assert ScoreAggregator(passing_score=None).passing_score == 70


def test_score_is_deterministic():
    answers = [scored(3, 2, True), scored(3, 1, True)]
    aggregator = ScoreAggregator(passing_score=50)
    assert aggregator.aggregate(answers) == aggregator.aggregate(answers)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(7.5) == 8
    assert round_half_up(1.49) == 1
    assert round_half_up(0) == 0
