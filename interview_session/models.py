from __future__ import annotations  # Interview session domain models

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .errors import InvalidTransition
from .transcript import Turn, dump_turns, load_turns


class SessionState(str, Enum):  # Lifecycle of one interview
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    CONCLUDING = "concluding"
    COMPLETED = "completed"


_NEXT_STATE = {
    SessionState.CREATED: SessionState.IN_PROGRESS,
    SessionState.IN_PROGRESS: SessionState.CONCLUDING,
    SessionState.CONCLUDING: SessionState.COMPLETED,
}


class Session(BaseModel):  # One candidate's interview, cached and persisted
    session_id: str
    resume_text: str
    job_description_text: str
    transcript: List[Turn] = Field(default_factory=list)
    question_count: int = Field(default=1, ge=1)
    state: SessionState = SessionState.CREATED
    started_at: datetime
    ended_at: Optional[datetime] = None
    feedback: Optional[str] = None
    completed: bool = False

    @property
    def accepts_answers(self) -> bool:
        return self.state is SessionState.IN_PROGRESS

    def advance(self, target: SessionState) -> "Session":  # Step exactly one state forward
        if _NEXT_STATE.get(self.state) is not target:
            raise InvalidTransition(f"{self.state.value} -> {target.value} is not a valid session transition")
        return self.model_copy(update={"state": target})

    def to_row(self) -> Dict[str, Any]:  # Shape expected by storage.sessions.insert_session
        return {
            "session_id": self.session_id,
            "resume_text": self.resume_text,
            "job_description_text": self.job_description_text,
            "transcript": dump_turns(self.transcript),
            "question_count": self.question_count,
            "state": self.state.value,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "feedback": self.feedback,
            "completed": self.completed,
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Session":
        return cls(
            session_id=row["session_id"],
            resume_text=row["resume_text"],
            job_description_text=row["job_description_text"],
            transcript=load_turns(row.get("transcript") or []),
            question_count=row.get("question_count") or 1,
            state=SessionState(row["state"]),
            started_at=datetime.fromisoformat(row["started_at"]),
            ended_at=datetime.fromisoformat(row["ended_at"]) if row.get("ended_at") else None,
            feedback=row.get("feedback"),
            completed=bool(row.get("completed")),
        )


def row_fields(fields: Dict[str, Any]) -> Dict[str, Any]:  # Convert partial session fields to storage values
    converted: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "transcript":
            converted[key] = dump_turns(value)
        elif key == "state":
            converted[key] = SessionState(value).value
        elif isinstance(value, datetime):
            converted[key] = value.isoformat()
        else:
            converted[key] = value
    return converted


class StartResult(BaseModel):  # Outcome of starting an interview
    session_id: str
    message: str


class AnswerResult(BaseModel):  # Interviewer reply to one candidate answer
    message: str
    should_end: bool


class FeedbackSummary(BaseModel):  # Feedback returned to the candidate
    feedback: str
    duration: int = Field(ge=0)
    questions: int


__all__ = [
    "AnswerResult",
    "FeedbackSummary",
    "Session",
    "SessionState",
    "StartResult",
    "row_fields",
]
