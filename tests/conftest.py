import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

from config.settings import settings
from interview_session import InterviewOrchestrator, SessionCache, SessionStore
from storage.migrate import migrate


RESUME = (
    "Jordan Blake. Senior backend engineer with eight years building Python services, "
    "event pipelines on Kafka, and PostgreSQL performance tuning."
)
JOB_DESCRIPTION = (
    "Staff Engineer, Platform. Own distributed systems design, mentor engineers, "
    "and lead reliability work across payment services."
)


class ScriptedProvider:
    """Fake provider that records every conversation it receives."""

    def __init__(self, replies=None):
        self.calls = []
        self._replies = list(replies or [])
        self.fail_with = None

    def complete(self, messages):
        self.calls.append([dict(message) for message in messages])
        if self.fail_with is not None:
            exc, self.fail_with = self.fail_with, None
            raise exc
        if self._replies:
            return self._replies.pop(0)
        instruction = messages[-1]["content"]
        if "comprehensive feedback" in instruction:
            return "## Overall impression\nSolid interview.\n- Clear answers"
        if "conclude the interview" in instruction:
            return "Thank you for your time, feedback will follow shortly."
        return f"Interview question {len(self.calls)}?"


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        td.cleanup()


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
def store():
    return SessionStore(SessionCache(capacity=16, ttl_s=600))


@pytest.fixture
def orchestrator(store, provider):
    return InterviewOrchestrator(store, provider, max_questions=3)
