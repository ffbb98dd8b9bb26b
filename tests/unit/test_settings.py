from __future__ import annotations

from config import Settings, route_from_settings


def test_defaults_match_interview_service():
    cfg = Settings(_env_file=None)

    assert cfg.MAX_QUESTIONS == 3
    assert cfg.PORT == 5001
    assert cfg.MAX_UPLOAD_BYTES == 5 * 1024 * 1024
    assert cfg.MIN_DOCUMENT_CHARS == 50
    assert cfg.LLM_TIMEOUT_S == 30
    assert cfg.FEEDBACK_REGENERATE is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAX_QUESTIONS", "5")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, https://app.example")
    monkeypatch.setenv("LLM_MODEL", "gemini-2.0-flash")

    cfg = Settings(_env_file=None)

    assert cfg.MAX_QUESTIONS == 5
    assert cfg.allowed_origins() == ["http://localhost:3000", "https://app.example"]
    route = route_from_settings(cfg)
    assert route.model == "gemini-2.0-flash"
    assert route.url.endswith("/chat/completions")
    assert route.api_key_env == "GEMINI_API_KEY"
