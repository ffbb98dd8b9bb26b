"""Application settings and configuration management."""
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interview.db")
    PORT: int = Field(default=5001, ge=1, le=65535)
    ALLOWED_ORIGINS: str = "*"

    MAX_QUESTIONS: int = Field(default=3, ge=1)

    LLM_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai"
    LLM_ENDPOINT: str = "/chat/completions"
    LLM_MODEL: str = "gemini-1.5-flash"
    LLM_API_KEY_ENV: str = "GEMINI_API_KEY"
    LLM_TIMEOUT_S: float = Field(default=30.0, ge=0.1)
    LLM_MAX_RETRIES: int = Field(default=1, ge=0)
    LLM_SEQUENTIAL: bool = False
    LLM_TEMPERATURE: float | None = None

    SESSION_CACHE_SIZE: int = Field(default=256, ge=1)
    SESSION_CACHE_TTL_S: float = Field(default=3600.0, gt=0)
    SESSION_LOCK_TIMEOUT_S: float = Field(default=0.0, ge=0)
    FEEDBACK_REGENERATE: bool = False

    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = Field(default=5 * 1024 * 1024, ge=1)
    MIN_DOCUMENT_CHARS: int = Field(default=50, ge=0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)

    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


settings = Settings()
