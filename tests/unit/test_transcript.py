from __future__ import annotations

import pytest
from pydantic import ValidationError

from interview_session.transcript import (
    Turn,
    append,
    count_role,
    dump_turns,
    load_turns,
    to_provider_messages,
)


def test_append_returns_new_list_and_keeps_order():
    base = [Turn.system("prime"), Turn.interviewer("Q1")]
    extended = append(base, Turn.candidate("A1"), Turn.interviewer("Q2"))

    assert len(base) == 2
    assert [t.content for t in extended] == ["prime", "Q1", "A1", "Q2"]


def test_turns_are_immutable_and_reject_blank_content():
    turn = Turn.candidate("answer")
    with pytest.raises(ValidationError):
        turn.content = "edited"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        Turn.candidate("   ")
    with pytest.raises(ValidationError):
        Turn(role="narrator", content="hi")  # type: ignore[arg-type]


def test_provider_messages_map_roles_and_append_instruction():
    turns = [Turn.system("prime"), Turn.interviewer("Q1"), Turn.candidate("A1")]

    messages = to_provider_messages(turns, "ask the next question")

    assert messages == [
        {"role": "user", "content": "prime"},
        {"role": "assistant", "content": "Q1"},
        {"role": "user", "content": "A1"},
        {"role": "user", "content": "ask the next question"},
    ]
    # The instruction is transient.
    assert len(turns) == 3


def test_dump_and_load_preserve_roles():
    turns = [Turn.system("prime"), Turn.interviewer("Q1"), Turn.candidate("A1")]

    restored = load_turns(dump_turns(turns))

    assert restored == turns
    assert count_role(restored, "interviewer") == 1
    assert count_role(restored, "candidate") == 1
