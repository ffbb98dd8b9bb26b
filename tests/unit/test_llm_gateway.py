from __future__ import annotations

import httpx
import pytest

from config import LlmRoute
from interview_session import GatewayProvider, ProviderError, ProviderTimeout
from llm_gateway import LlmGatewayError, LlmTimeoutError, chat


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeClient:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def post(self, url, *, json, headers, timeout):
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _route(**overrides) -> LlmRoute:
    data = dict(
        name="interviewer",
        base_url="https://llm.example/v1/",
        endpoint="/chat/completions",
        model="test-model",
        timeout_s=12,
        max_retries=1,
        api_key_env="TEST_LLM_KEY",
    )
    data.update(overrides)
    return LlmRoute(**data)


def _reply(content):
    return FakeResponse(payload={"choices": [{"message": {"role": "assistant", "content": content}}]})


MESSAGES = [{"role": "user", "content": "Introduce yourself"}]


def test_chat_posts_openai_payload_with_bearer_key(monkeypatch):
    monkeypatch.setenv("TEST_LLM_KEY", "secret")
    client = FakeClient(_reply("  Hello, I am your interviewer.  "))

    text = chat(MESSAGES, cfg=_route(temperature=0.4), client=client)

    assert text == "Hello, I am your interviewer."
    [request] = client.requests
    assert request["url"] == "https://llm.example/v1/chat/completions"
    assert request["json"] == {"model": "test-model", "messages": MESSAGES, "temperature": 0.4}
    assert request["headers"]["Authorization"] == "Bearer secret"
    assert request["timeout"] == 12


def test_empty_content_is_retried_then_fails():
    client = FakeClient(_reply(""), _reply("Second try works"))
    assert chat(MESSAGES, cfg=_route(), client=client) == "Second try works"

    client = FakeClient(_reply(""), _reply("  "))
    with pytest.raises(LlmGatewayError):
        chat(MESSAGES, cfg=_route(), client=client)
    assert len(client.requests) == 2


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(status_code=503, text="unavailable"),
        FakeResponse(payload=ValueError("not json")),
        FakeResponse(payload={"unexpected": True}),
    ],
)
def test_bad_responses_raise_gateway_error(response):
    with pytest.raises(LlmGatewayError):
        chat(MESSAGES, cfg=_route(), client=FakeClient(response))


def test_timeout_is_reported_separately():
    client = FakeClient(httpx.ReadTimeout("slow"))
    with pytest.raises(LlmTimeoutError):
        chat(MESSAGES, cfg=_route(), client=client)


def test_empty_conversation_is_rejected():
    with pytest.raises(ValueError):
        chat([], cfg=_route(), client=FakeClient())


def test_gateway_provider_maps_errors():
    provider = GatewayProvider(_route(sequential=True), client=FakeClient(_reply("Q1?")))
    assert provider.complete(MESSAGES) == "Q1?"

    with pytest.raises(ProviderTimeout):
        GatewayProvider(_route(), client=FakeClient(httpx.ConnectTimeout("slow"))).complete(MESSAGES)
    with pytest.raises(ProviderError) as excinfo:
        GatewayProvider(_route(), client=FakeClient(httpx.ConnectError("refused"))).complete(MESSAGES)
    assert not isinstance(excinfo.value, ProviderTimeout)
    assert excinfo.value.status_code == 502
