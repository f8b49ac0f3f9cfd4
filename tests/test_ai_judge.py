import asyncio

from app.core.scoring.ai_judge import (
    AIJudge,
    JudgeOutcome,
    parse_judge_response,
)


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    def __init__(self, content=None, error=None, delay=0):
        self.content = content
        self.error = error
        self.delay = delay
        self.prompts = []

    async def ainvoke(self, messages):
        self.prompts.append(messages[0].content)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return FakeMessage(self.content)


def test_parse_score_and_feedback():
    verdict = parse_judge_response("Score: 72\nFeedback: Clear, but misses edge cases.\n")
    assert verdict.outcome == JudgeOutcome.OK
    assert verdict.score == 72
    assert verdict.feedback == "Clear, but misses edge cases."


def test_parse_is_case_insensitive_and_tolerates_prose():
    verdict = parse_judge_response("Here you go.\nscore: 40 out of 100\nfeedback: Too short.")
    assert verdict.score == 40
    assert verdict.feedback == "Too short."


def test_missing_score_defaults_to_zero():
    verdict = parse_judge_response("Feedback: No score given.")
    assert verdict.score == 0
    assert verdict.feedback == "No score given."


def test_missing_feedback_falls_back_to_raw_text():
    verdict = parse_judge_response("  Score: 55  ")
    assert verdict.score == 55
    assert verdict.feedback == "Score: 55"


def test_score_is_clamped():
    assert parse_judge_response("Score: 250\nFeedback: x").score == 100


def test_unconfigured_judge_is_unavailable(monkeypatch):
    monkeypatch.setattr("app.core.scoring.ai_judge.LLMFactory.is_configured", staticmethod(lambda api_key=None: False))
    verdict = asyncio.run(AIJudge().judge("Q", "A"))
    assert verdict.outcome == JudgeOutcome.UNAVAILABLE
    assert verdict.score == 0
    assert verdict.feedback == "AI evaluation unavailable."


def test_judge_parses_model_output():
    llm = FakeLLM(content="Score: 90\nFeedback: Great.")
    verdict = asyncio.run(AIJudge(llm=llm).judge("What is HTTP?", "A protocol."))
    assert verdict.outcome == JudgeOutcome.OK
    assert verdict.score == 90
    assert "Question: What is HTTP?" in llm.prompts[0]
    assert "Answer: A protocol." in llm.prompts[0]


def test_judge_handles_content_blocks():
    llm = FakeLLM(content=[{"type": "text", "text": "Score: 30\n"}, {"type": "text", "text": "Feedback: Thin."}])
    verdict = asyncio.run(AIJudge(llm=llm).judge("Q", "A"))
    assert verdict.score == 30
    assert verdict.feedback == "Thin."


def test_judge_error_degrades_to_failed():
    llm = FakeLLM(error=ConnectionError("boom"))
    verdict = asyncio.run(AIJudge(llm=llm).judge("Q", "A"))
    assert verdict.outcome == JudgeOutcome.FAILED
    assert verdict.score == 0
    assert verdict.feedback == "AI evaluation failed."


def test_judge_timeout_degrades_to_failed():
    llm = FakeLLM(content="Score: 90\nFeedback: Late.", delay=1)
    verdict = asyncio.run(AIJudge(llm=llm, timeout=0.01).judge("Q", "A"))
    assert verdict.outcome == JudgeOutcome.FAILED
