"""Tests for the SQLite migration and session row helpers."""
from __future__ import annotations

import os
import sqlite3

import pytest

from storage.migrate import migrate
from storage.sessions import fetch_session, insert_session, list_sessions, update_session_fields


def _row(session_id: str, started_at: str) -> dict:
    return dict(
        session_id=session_id,
        resume_text="resume",
        job_description_text="jd",
        transcript=[{"role": "system", "content": "prime"}, {"role": "interviewer", "content": "Q1"}],
        question_count=1,
        state="in_progress",
        started_at=started_at,
    )


def test_migrate_is_repeatable(tmp_db: str):
    migrate(tmp_db)
    assert os.path.exists(tmp_db)
    with sqlite3.connect(tmp_db) as conn:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert "interview_sessions" in tables


def test_insert_fetch_and_update(tmp_db: str):
    insert_session(**_row("s-1", "2024-05-01T09:00:00+00:00"))

    row = fetch_session("s-1")
    assert row["transcript"][1] == {"role": "interviewer", "content": "Q1"}
    assert row["completed"] is False
    assert row["ended_at"] is None

    assert update_session_fields(
        "s-1",
        {"feedback": "## Overall", "completed": True, "state": "completed", "ended_at": "2024-05-01T09:10:00+00:00"},
    )
    row = fetch_session("s-1")
    assert row["completed"] is True
    assert row["feedback"] == "## Overall"
    assert fetch_session("nope") is None


def test_update_guards(tmp_db: str):
    insert_session(**_row("s-1", "2024-05-01T09:00:00+00:00"))

    with pytest.raises(ValueError):
        update_session_fields("s-1", {"resume_text": "rewritten"})
    assert update_session_fields("missing", {"question_count": 2}) is False


def test_duplicate_insert_raises(tmp_db: str):
    insert_session(**_row("s-1", "2024-05-01T09:00:00+00:00"))
    with pytest.raises(sqlite3.IntegrityError):
        insert_session(**_row("s-1", "2024-05-01T09:00:00+00:00"))


def test_list_sessions_newest_first(tmp_db: str):
    insert_session(**_row("old", "2024-05-01T09:00:00+00:00"))
    insert_session(**_row("new", "2024-05-02T09:00:00+00:00"))

    assert [row["session_id"] for row in list_sessions(limit=5)] == ["new", "old"]
    assert len(list_sessions(limit=1)) == 1
