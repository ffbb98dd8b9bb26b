from __future__ import annotations  # Generative provider boundary for the interview core

from typing import Dict, Optional, Protocol, Sequence

from config import LlmRoute
from llm_gateway import HttpClient, LlmGatewayError, LlmTimeoutError, chat

from .errors import ProviderError, ProviderTimeout


class InterviewProvider(Protocol):  # Produces the next model-authored turn for a conversation
    def complete(self, messages: Sequence[Dict[str, str]]) -> str: ...


class GatewayProvider:  # Provider backed by the HTTP LLM gateway
    def __init__(self, route: LlmRoute, client: Optional[HttpClient] = None) -> None:
        self._route = route
        self._client = client

    @property
    def route(self) -> LlmRoute:
        return self._route

    def complete(self, messages: Sequence[Dict[str, str]]) -> str:
        try:
            text = chat(messages, cfg=self._route, client=self._client)
        except LlmTimeoutError as exc:
            raise ProviderTimeout(str(exc)) from exc
        except LlmGatewayError as exc:
            raise ProviderError(f"Provider request failed: {exc}") from exc
        if not text.strip():
            raise ProviderError("Provider returned empty content")
        return text


__all__ = ["GatewayProvider", "InterviewProvider"]
