from __future__ import annotations

from datetime import datetime, timezone

import pytest

from interview_session.errors import InvalidTransition
from interview_session.models import Session, SessionState, row_fields
from interview_session.transcript import Turn


def _session(**overrides) -> Session:
    data = dict(
        session_id="s-1",
        resume_text="resume",
        job_description_text="jd",
        transcript=[Turn.system("prime"), Turn.interviewer("Q1")],
        started_at=datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
    )
    data.update(overrides)
    return Session(**data)


def test_advance_moves_one_step_at_a_time():
    session = _session()
    assert session.state is SessionState.CREATED
    assert not session.accepts_answers

    running = session.advance(SessionState.IN_PROGRESS)
    assert running.accepts_answers
    assert session.state is SessionState.CREATED

    with pytest.raises(InvalidTransition):
        running.advance(SessionState.COMPLETED)
    with pytest.raises(InvalidTransition):
        running.advance(SessionState.CREATED)

    done = running.advance(SessionState.CONCLUDING).advance(SessionState.COMPLETED)
    with pytest.raises(InvalidTransition):
        done.advance(SessionState.CONCLUDING)


def test_row_round_trip_keeps_timestamps_and_transcript():
    session = _session(
        state=SessionState.COMPLETED,
        ended_at=datetime(2024, 5, 1, 9, 12, tzinfo=timezone.utc),
        feedback="## Overall",
        completed=True,
    )

    restored = Session.from_row(session.to_row())

    assert restored == session


def test_row_fields_serialises_partial_updates():
    ended = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    fields = row_fields(
        {"transcript": [Turn.candidate("A1")], "state": SessionState.CONCLUDING, "ended_at": ended, "completed": True}
    )

    assert fields == {
        "transcript": [{"role": "candidate", "content": "A1"}],
        "state": "concluding",
        "ended_at": ended.isoformat(),
        "completed": True,
    }
