"""Final feedback synthesis over a completed transcript."""
from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence

from session_reports.models import FeedbackExchange, FeedbackReport

from .errors import ProviderError
from .models import Session
from .prompts import feedback_instruction
from .provider import InterviewProvider
from .transcript import Turn, to_provider_messages


class FeedbackGenerator:
    """Request the structured feedback report for a full transcript.

    The report is an opaque markdown blob; the only check applied to it is
    that it is non-empty.
    """

    def __init__(self, provider: InterviewProvider) -> None:
        self._provider = provider

    def generate(self, transcript: Sequence[Turn]) -> str:
        if not transcript:
            raise ValueError("cannot generate feedback for an empty transcript")
        messages = to_provider_messages(transcript, instruction=feedback_instruction())
        feedback = self._provider.complete(messages)
        if not feedback or not feedback.strip():
            raise ProviderError("Provider returned empty feedback")
        return feedback.strip()


def duration_seconds(started_at: datetime, ended_at: Optional[datetime]) -> int:
    """Whole seconds between start and end, floored and never negative."""

    if ended_at is None:
        return 0
    elapsed = (ended_at - started_at).total_seconds()
    return max(0, math.floor(elapsed))


def pair_exchanges(transcript: Sequence[Turn]) -> List[FeedbackExchange]:
    """Pair each interviewer question with the candidate answer that follows it."""

    exchanges: List[FeedbackExchange] = []
    for turn in transcript:
        if turn.role == "interviewer":
            exchanges.append(FeedbackExchange(sequence=len(exchanges) + 1, question=turn.content))
        elif turn.role == "candidate" and exchanges and not exchanges[-1].answer:
            exchanges[-1] = exchanges[-1].model_copy(update={"answer": turn.content})
    return exchanges


def build_report(session: Session) -> FeedbackReport:
    return FeedbackReport(
        session_id=session.session_id,
        feedback=session.feedback or "",
        duration=duration_seconds(session.started_at, session.ended_at),
        questions=session.question_count,
        started_at=session.started_at,
        ended_at=session.ended_at,
        exchanges=pair_exchanges(session.transcript),
    )


__all__ = ["FeedbackGenerator", "build_report", "duration_seconds", "pair_exchanges"]
