import asyncio

import pytest

from app.core.scoring.ai_judge import JudgeOutcome, JudgeVerdict
from app.core.scoring.evaluators import (
    CodingEvaluator,
    EvaluationContext,
    MultipleChoiceEvaluator,
    UnscoredEvaluator,
    WrittenAnswerEvaluator,
)
from app.schemas.submission import CodingAnswer, MultipleChoiceAnswer, UnscoredAnswer, WrittenAnswer

from conftest import StubJudge


def run(coro):
    return asyncio.run(coro)


class TestMultipleChoiceEvaluator:
    evaluator = MultipleChoiceEvaluator()

    def test_normalized_answers_on_same_option_get_full_credit(self):
        result = self.evaluator.grade("a", "A", ["A", "a ", "B"], 5)
        assert result.points == 5
        assert result.is_correct is True

    def test_same_text_on_different_options_gets_no_credit(self):
        options = ["All", "None", "Some", "None"]
        result = self.evaluator.grade("None", 3, options, 5)
        assert result.points == 0
        assert result.is_correct is False

    def test_wrong_option(self):
        result = self.evaluator.grade("B", "A", ["A", "B"], 5)
        assert result.points == 0
        assert result.is_correct is False

    def test_answer_outside_options_gets_no_credit(self):
        result = self.evaluator.grade("Z", "Z", ["A", "B"], 5)
        assert result.points == 0

    @pytest.mark.parametrize("submitted", [None, "", "   ", []])
    def test_blank_answer_gets_no_credit(self, submitted):
        result = self.evaluator.grade(submitted, "A", ["A", "B"], 5)
        assert result.points == 0
        assert result.is_correct is False

    def test_without_options_falls_back_to_text_equality(self):
        assert self.evaluator.grade(" Paris", "paris", None, 4).points == 4
        assert self.evaluator.grade("Lyon", "paris", None, 4).points == 0

    def test_multi_select_is_order_independent(self):
        options = ["Red", "Green", "Blue"]
        assert self.evaluator.grade(["blue", "red"], ["Red", "Blue"], options, 6).points == 6
        assert self.evaluator.grade(["blue"], ["Red", "Blue"], options, 6).points == 0

    def test_multi_select_without_options(self):
        assert self.evaluator.grade(["b", "a"], ["A", "B"], None, 2).points == 2

    def test_evaluate_uses_context_reference(self):
        answer = MultipleChoiceAnswer(
            question_type="Multiple Choice",
            answer="B",
            correct_answer="B",
            options=["A", "B"],
            max_points=3,
        )
        result = run(self.evaluator.evaluate(answer, EvaluationContext(correct_answer="A")))
        assert result.points == 0


class TestWrittenAnswerEvaluator:
    def answer(self, text="Indexes speed up lookups.", max_points=10):
        return WrittenAnswer(
            question_type="Written Answer",
            question_text="Why use an index?",
            answer=text,
            max_points=max_points,
        )

    def test_score_below_floor_earns_nothing(self):
        judge = StubJudge(JudgeVerdict(outcome=JudgeOutcome.OK, score=14, feedback="Off topic."))
        result = run(WrittenAnswerEvaluator(judge, min_score=15).evaluate(self.answer(), EvaluationContext()))
        assert result.points == 0
        assert result.is_correct is False
        assert result.extras == {"aiScore": 14, "aiFeedback": "Off topic."}

    def test_score_at_floor_scales_linearly(self):
        judge = StubJudge(JudgeVerdict(outcome=JudgeOutcome.OK, score=15, feedback="Weak."))
        result = run(WrittenAnswerEvaluator(judge, min_score=15).evaluate(self.answer(), EvaluationContext()))
        assert result.points == 2
        assert result.is_correct is True

    def test_full_score(self):
        judge = StubJudge(JudgeVerdict(outcome=JudgeOutcome.OK, score=100, feedback="Excellent."))
        result = run(WrittenAnswerEvaluator(judge).evaluate(self.answer(max_points=7), EvaluationContext()))
        assert result.points == 7

    def test_judge_failure_degrades_to_zero(self):
        judge = StubJudge(JudgeVerdict.failed())
        result = run(WrittenAnswerEvaluator(judge).evaluate(self.answer(), EvaluationContext()))
        assert result.points == 0
        assert result.is_correct is False
        assert result.extras["aiFeedback"] == "AI evaluation failed."

    def test_blank_answer_skips_the_judge(self):
        judge = StubJudge()
        result = run(WrittenAnswerEvaluator(judge).evaluate(self.answer(text="  "), EvaluationContext()))
        assert result.points == 0
        assert judge.calls == []

    def test_null_question_text_is_accepted(self):
        judge = StubJudge()
        answer = WrittenAnswer.model_validate({
            "questionType": "Written Answer",
            "questionText": None,
            "answer": "Indexes speed up lookups.",
            "maxPoints": 10,
        })
        result = run(WrittenAnswerEvaluator(judge).evaluate(answer, EvaluationContext()))
        assert answer.question_text == ""
        assert judge.calls == [("", "Indexes speed up lookups.")]
        assert result.points == 8

    def test_floor_defaults_to_settings(self):
        assert WrittenAnswerEvaluator(StubJudge()).min_score == 15


class TestCodingEvaluator:
    def answer(self, passed, max_points=10):
        return CodingAnswer(
            question_type="Coding",
            max_points=max_points,
            coding_test_results=[{"passed": p} for p in passed],
        )

    def test_three_of_four_cases(self):
        result = run(CodingEvaluator().evaluate(self.answer([True, True, True, False]), EvaluationContext()))
        assert result.points == 8
        assert result.is_correct is None

    def test_no_test_cases(self):
        result = run(CodingEvaluator().evaluate(self.answer([]), EvaluationContext()))
        assert result.points == 0

    def test_all_cases_pass(self):
        result = run(CodingEvaluator().evaluate(self.answer([True, True], max_points=5), EvaluationContext()))
        assert result.points == 5


def test_unknown_question_type_is_unscored():
    answer = UnscoredAnswer(question_type="Essay Upload", answer="file.pdf", max_points=5)
    result = run(UnscoredEvaluator().evaluate(answer, EvaluationContext()))
    assert result.points == 0
    assert result.is_correct is False
