"""Conversation transcript shared by the session store and provider calls.

A transcript is an ordered list of :class:`Turn` values. It is replayed to the
provider verbatim on every call, so helpers here only ever build new lists and
never edit, reorder or drop existing turns.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, field_validator

Role = Literal["system", "interviewer", "candidate"]

# The priming instruction is sent as the opening user message; the provider
# expects the conversation to start with a user-authored turn.
PROVIDER_ROLES: Dict[str, str] = {
    "system": "user",
    "interviewer": "assistant",
    "candidate": "user",
}


class Turn(BaseModel):
    """One unit of conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("turn content must not be empty")
        return value

    @classmethod
    def system(cls, content: str) -> "Turn":
        return cls(role="system", content=content)

    @classmethod
    def interviewer(cls, content: str) -> "Turn":
        return cls(role="interviewer", content=content)

    @classmethod
    def candidate(cls, content: str) -> "Turn":
        return cls(role="candidate", content=content)


def append(turns: Sequence[Turn], *new_turns: Turn) -> List[Turn]:
    """Return a new transcript with ``new_turns`` added at the end."""

    return [*turns, *new_turns]


def count_role(turns: Iterable[Turn], role: Role) -> int:
    return sum(1 for turn in turns if turn.role == role)


def to_provider_messages(turns: Sequence[Turn], instruction: Optional[str] = None) -> List[Dict[str, str]]:
    """Map turns to chat messages, optionally followed by a transient instruction."""

    messages = [{"role": PROVIDER_ROLES[turn.role], "content": turn.content} for turn in turns]
    if instruction:
        messages.append({"role": "user", "content": instruction})
    return messages


def dump_turns(turns: Iterable[Turn]) -> List[Dict[str, str]]:
    return [turn.model_dump() for turn in turns]


def load_turns(raw: Iterable[Dict[str, str]]) -> List[Turn]:
    return [Turn.model_validate(item) for item in raw]


__all__ = [
    "PROVIDER_ROLES",
    "Role",
    "Turn",
    "append",
    "count_role",
    "dump_turns",
    "load_turns",
    "to_provider_messages",
]
