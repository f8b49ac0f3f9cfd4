"""
Configuration management using Pydantic settings.
"""
from typing import List, Union
import os
from pydantic import AnyHttpUrl, validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
load_dotenv()



class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Assessment Scoring Service"
    DEBUG: bool = True
    ENV: str = os.getenv("ENV", "development")

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./assessment.db")

    # JWT Configuration (employee endpoints)
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")

    # AI judge Configuration
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    AI_JUDGE_MODEL: str = os.getenv("AI_JUDGE_MODEL", "gpt-4o-mini")
    AI_JUDGE_BASE_URL: str = os.getenv("AI_JUDGE_BASE_URL", "")
    AI_JUDGE_TIMEOUT_SECONDS: float = float(os.getenv("AI_JUDGE_TIMEOUT_SECONDS", 30))
    AI_JUDGE_MAX_RETRIES: int = int(os.getenv("AI_JUDGE_MAX_RETRIES", 0))
    # Written answers scored below this floor earn no points at all
    AI_JUDGE_MIN_SCORE: int = int(os.getenv("AI_JUDGE_MIN_SCORE", 15))

    # Scoring Configuration
    DEFAULT_PASSING_SCORE: int = int(os.getenv("DEFAULT_PASSING_SCORE", 70))

    # LangSmith Tracing Configuration
    LANGSMITH_TRACING: bool = os.getenv("LANGSMITH_TRACING", "false").lower() == "true"
    LANGSMITH_ENDPOINT: str = os.getenv("LANGSMITH_ENDPOINT", "")
    LANGSMITH_API_KEY: str = os.getenv("LANGSMITH_API_KEY", "")
    LANGSMITH_PROJECT: str = os.getenv("LANGSMITH_PROJECT", "")

    # CORS Configuration
    BACKEND_CORS_ORIGINS: Union[List[AnyHttpUrl], str] = "*"

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if v == "*" or v == ["*"]:
            return "*"
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
