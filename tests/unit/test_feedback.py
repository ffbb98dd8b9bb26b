from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import ScriptedProvider
from interview_session import FeedbackGenerator, ProviderError, Session, SessionState, build_report, duration_seconds
from interview_session.feedback import pair_exchanges
from interview_session.prompts import FEEDBACK_SECTIONS
from interview_session.transcript import Turn

TRANSCRIPT = [
    Turn.system("prime"),
    Turn.interviewer("Tell me about yourself."),
    Turn.candidate("I build data platforms."),
    Turn.interviewer("What was your hardest outage?"),
    Turn.candidate("A replication lag incident."),
]


def test_generate_sends_transcript_and_section_instruction():
    provider = ScriptedProvider(replies=["  ## Overall impression\nGood.  "])

    feedback = FeedbackGenerator(provider).generate(TRANSCRIPT)

    assert feedback == "## Overall impression\nGood."
    [messages] = provider.calls
    assert len(messages) == len(TRANSCRIPT) + 1
    instruction = messages[-1]["content"]
    for section in FEEDBACK_SECTIONS:
        assert section in instruction
    assert "markdown" in instruction


def test_generate_rejects_empty_inputs_and_outputs():
    with pytest.raises(ValueError):
        FeedbackGenerator(ScriptedProvider()).generate([])
    with pytest.raises(ProviderError):
        FeedbackGenerator(ScriptedProvider(replies=[""])).generate(TRANSCRIPT)


def test_duration_is_floored_and_never_negative():
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    assert duration_seconds(start, start + timedelta(seconds=61, milliseconds=999)) == 61
    assert duration_seconds(start, start - timedelta(seconds=5)) == 0
    assert duration_seconds(start, None) == 0


def test_pair_exchanges_skips_priming_and_matches_answers():
    exchanges = pair_exchanges(TRANSCRIPT + [Turn.interviewer("Unanswered?")])

    assert [(e.sequence, e.question, e.answer) for e in exchanges] == [
        (1, "Tell me about yourself.", "I build data platforms."),
        (2, "What was your hardest outage?", "A replication lag incident."),
        (3, "Unanswered?", ""),
    ]


def test_build_report_uses_session_fields():
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    session = Session(
        session_id="s-1",
        resume_text="resume",
        job_description_text="jd",
        transcript=TRANSCRIPT,
        question_count=2,
        state=SessionState.COMPLETED,
        started_at=start,
        ended_at=start + timedelta(minutes=3),
        feedback="## Overall",
        completed=True,
    )

    report = build_report(session)

    assert report.duration == 180
    assert report.questions == 2
    assert len(report.exchanges) == 2
