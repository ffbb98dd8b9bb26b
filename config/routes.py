from __future__ import annotations  # Provider route configuration

from typing import Dict, TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:  # pragma: no cover
    from .settings import Settings


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(default=30.0, ge=0.1)
    max_retries: int = Field(default=1, ge=0)
    api_key_env: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)

    @property
    def url(self) -> str:  # Full request URL
        return f"{self.base_url.rstrip('/')}{self.endpoint}"


def route_from_settings(settings: "Settings") -> LlmRoute:  # Build the interviewer route from environment settings
    return LlmRoute(
        name="interviewer",
        base_url=settings.LLM_BASE_URL,
        endpoint=settings.LLM_ENDPOINT,
        model=settings.LLM_MODEL,
        timeout_s=settings.LLM_TIMEOUT_S,
        max_retries=settings.LLM_MAX_RETRIES,
        api_key_env=settings.LLM_API_KEY_ENV or None,
        sequential=settings.LLM_SEQUENTIAL,
        temperature=settings.LLM_TEMPERATURE,
    )


__all__ = ["LlmRoute", "route_from_settings"]
