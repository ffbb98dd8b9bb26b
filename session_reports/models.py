from __future__ import annotations  # Feedback report domain models

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class FeedbackExchange(BaseModel):  # Interviewer question paired with the candidate's answer
    sequence: int
    question: str
    answer: str = ""


class FeedbackReport(BaseModel):  # Completed interview with feedback and Q&A transcript
    session_id: str
    feedback: str
    duration: int = Field(ge=0)
    questions: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    exchanges: List[FeedbackExchange] = Field(default_factory=list)


__all__ = ["FeedbackExchange", "FeedbackReport"]
