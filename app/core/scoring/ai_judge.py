"""
AI judge client for written answers.

The judge never raises: every call resolves to a JudgeVerdict whose outcome
tells the caller whether the score came from the model, the judge is not
configured, or the call failed.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from langchain_core.messages import HumanMessage

from app.core.config import settings
from app.core.llm_config import LLMFactory
from app.core.scoring.prompts import WRITTEN_ANSWER_EVALUATION_PROMPT

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"Score:\s*(\d+)", re.IGNORECASE)
FEEDBACK_PATTERN = re.compile(r"Feedback:\s*([\s\S]*)", re.IGNORECASE)

UNAVAILABLE_FEEDBACK = "AI evaluation unavailable."
FAILED_FEEDBACK = "AI evaluation failed."


class JudgeOutcome(str, Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


@dataclass(frozen=True)
class JudgeVerdict:
    """Result of one judge call."""
    outcome: JudgeOutcome
    score: int = 0
    feedback: str = ""

    @classmethod
    def unavailable(cls) -> "JudgeVerdict":
        return cls(outcome=JudgeOutcome.UNAVAILABLE, score=0, feedback=UNAVAILABLE_FEEDBACK)

    @classmethod
    def failed(cls) -> "JudgeVerdict":
        return cls(outcome=JudgeOutcome.FAILED, score=0, feedback=FAILED_FEEDBACK)


def parse_judge_response(text: str) -> JudgeVerdict:
    """
    Parse a 'Score: <n>' / 'Feedback: <text>' response.

    Missing score defaults to 0 (clamped to 0-100 otherwise); missing
    feedback falls back to the whole response text.
    """
    text = text or ""
    score_match = SCORE_PATTERN.search(text)
    feedback_match = FEEDBACK_PATTERN.search(text)
    score = int(score_match.group(1)) if score_match else 0
    feedback = feedback_match.group(1).strip() if feedback_match else text.strip()
    return JudgeVerdict(outcome=JudgeOutcome.OK, score=max(0, min(score, 100)), feedback=feedback)


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get("text", "")))
            else:
                parts.append(str(part))
        return "".join(parts)
    return "" if content is None else str(content)


class AIJudge:
    """
    Scores free-text answers with an LLM under a bounded timeout.
    """

    def __init__(self, llm: Optional[Any] = None, timeout: Optional[float] = None):
        self._llm = llm
        self.timeout = timeout if timeout is not None else settings.AI_JUDGE_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return self._llm is not None or LLMFactory.is_configured()

    def _get_llm(self) -> Any:
        if self._llm is None:
            self._llm = LLMFactory.create_llm(temperature=0.0, tracing_project="ai-judge")
        return self._llm

    async def judge(self, question_text: str, answer_text: str) -> JudgeVerdict:
        """
        Ask the judge for a score and feedback.

        Args:
            question_text: The question shown to the candidate
            answer_text: The candidate's answer

        Returns:
            JudgeVerdict; never raises
        """
        if not self.is_configured:
            logger.warning("AI judge is not configured, written answer gets no credit")
            return JudgeVerdict.unavailable()

        prompt = WRITTEN_ANSWER_EVALUATION_PROMPT.format(
            question_text=question_text,
            answer_text=answer_text,
        )
        try:
            llm = self._get_llm()
            response = await asyncio.wait_for(
                llm.ainvoke([HumanMessage(content=prompt)]),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"AI judge timed out after {self.timeout}s")
            return JudgeVerdict.failed()
        except Exception as e:
            logger.error(f"AI judge call failed: {e}")
            return JudgeVerdict.failed()

        try:
            return parse_judge_response(_response_text(response))
        except Exception as e:
            logger.error(f"Could not parse AI judge response: {e}")
            return JudgeVerdict.failed()
