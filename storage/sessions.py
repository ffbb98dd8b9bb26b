"""Persistence helpers for interview sessions."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .sqlite import get_conn

# Columns that may change after a session row is created.
MUTABLE_COLUMNS = {
    "transcript",
    "question_count",
    "state",
    "ended_at",
    "feedback",
    "completed",
}


class SessionRowPayload(BaseModel):
    session_id: str
    resume_text: str
    job_description_text: str
    transcript: List[Dict[str, str]] = Field(default_factory=list)
    question_count: int = 1
    state: str
    started_at: str
    ended_at: Optional[str] = None
    feedback: Optional[str] = None
    completed: bool = False


def _now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def insert_session(**data: Any) -> None:
    """Insert a new session row; duplicate identifiers raise ``sqlite3.IntegrityError``."""

    payload = SessionRowPayload(**data)
    with get_conn() as conn:
        conn.execute(
            """INSERT INTO interview_sessions
               (session_id, resume_text, job_description_text, transcript_json,
                question_count, state, started_at, ended_at, feedback, completed, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                payload.session_id,
                payload.resume_text,
                payload.job_description_text,
                json.dumps(payload.transcript, ensure_ascii=False),
                payload.question_count,
                payload.state,
                payload.started_at,
                payload.ended_at,
                payload.feedback,
                int(payload.completed),
                _now(),
            ),
        )


def fetch_session(session_id: str) -> Optional[Dict[str, Any]]:
    """Return the stored session as a plain dict, or ``None`` when unknown."""

    with get_conn() as conn:
        row = conn.execute(
            """SELECT session_id, resume_text, job_description_text, transcript_json,
                      question_count, state, started_at, ended_at, feedback, completed, updated_at
               FROM interview_sessions
               WHERE session_id = ?""",
            (session_id,),
        ).fetchone()
    if row is None:
        return None
    return _row_to_dict(row)


def update_session_fields(session_id: str, fields: Dict[str, Any]) -> bool:
    """Apply ``fields`` to one session row and report whether a row matched."""

    unknown = set(fields) - MUTABLE_COLUMNS
    if unknown:
        raise ValueError(f"Cannot update session columns: {sorted(unknown)}")
    if not fields:
        return True
    assignments: List[str] = []
    values: List[Any] = []
    for key, value in fields.items():
        if key == "transcript":
            assignments.append("transcript_json = ?")
            values.append(json.dumps(value, ensure_ascii=False))
        elif key == "completed":
            assignments.append("completed = ?")
            values.append(int(bool(value)))
        else:
            assignments.append(f"{key} = ?")
            values.append(value)
    assignments.append("updated_at = ?")
    values.append(_now())
    values.append(session_id)
    with get_conn() as conn:
        cur = conn.execute(
            f"UPDATE interview_sessions SET {', '.join(assignments)} WHERE session_id = ?",
            tuple(values),
        )
        return cur.rowcount > 0


def list_sessions(limit: int = 20) -> List[Dict[str, Any]]:
    """Return the most recently started sessions, newest first."""

    with get_conn() as conn:
        rows = conn.execute(
            """SELECT session_id, resume_text, job_description_text, transcript_json,
                      question_count, state, started_at, ended_at, feedback, completed, updated_at
               FROM interview_sessions
               ORDER BY started_at DESC, session_id DESC
               LIMIT ?""",
            (limit,),
        ).fetchall()
    return [_row_to_dict(row) for row in rows]


def _row_to_dict(row: Any) -> Dict[str, Any]:
    return {
        "session_id": row["session_id"],
        "resume_text": row["resume_text"],
        "job_description_text": row["job_description_text"],
        "transcript": json.loads(row["transcript_json"] or "[]"),
        "question_count": int(row["question_count"]),
        "state": row["state"],
        "started_at": row["started_at"],
        "ended_at": row["ended_at"],
        "feedback": row["feedback"],
        "completed": bool(row["completed"]),
        "updated_at": row["updated_at"],
    }


__all__ = [
    "MUTABLE_COLUMNS",
    "SessionRowPayload",
    "fetch_session",
    "insert_session",
    "list_sessions",
    "update_session_fields",
]
