import os
from typing import Optional
from langchain_openai import ChatOpenAI
from pydantic import SecretStr
from app.core.config import settings

class LLMFactory:
    """Factory for creating configured LLM instances with tracing."""

    @staticmethod
    def is_configured(api_key: Optional[str] = None) -> bool:
        """Whether an API key is available for the judge model."""
        return bool(api_key or settings.OPENAI_API_KEY)

    @staticmethod
    def create_llm(
        model: Optional[str] = None,
        base_url: Optional[str] = "",
        temperature: float = 0.0,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        tracing_project: Optional[str] = None,
        api_key: Optional[str] = None
    ) -> ChatOpenAI:
        """
        Create a configured ChatOpenAI instance.

        Args:
            model: The model name to use (defaults to settings.AI_JUDGE_MODEL).
            base_url: Optional OpenAI-compatible endpoint.
            temperature: The temperature for generation.
            timeout: Request timeout in seconds.
            max_retries: Client-side retries per request.
            tracing_project: The LangSmith project name for tracing.
            api_key: OpenAI API key (optional, defaults to settings).
        """
        # Set env vars for tracing if provided
        if settings.LANGSMITH_TRACING:
            os.environ["LANGCHAIN_TRACING_V2"] = "true"
            os.environ["LANGCHAIN_ENDPOINT"] = settings.LANGSMITH_ENDPOINT
            os.environ["LANGCHAIN_API_KEY"] = settings.LANGSMITH_API_KEY
            os.environ["LANGCHAIN_PROJECT"] = tracing_project or settings.LANGSMITH_PROJECT

        return ChatOpenAI(
            model=model or settings.AI_JUDGE_MODEL,
            api_key=SecretStr(api_key or settings.OPENAI_API_KEY),
            base_url=base_url or settings.AI_JUDGE_BASE_URL or None,
            temperature=temperature,
            timeout=timeout if timeout is not None else settings.AI_JUDGE_TIMEOUT_SECONDS,
            max_retries=max_retries if max_retries is not None else settings.AI_JUDGE_MAX_RETRIES,
        )
