"""Interview session state machine.

Sessions move ``CREATED -> IN_PROGRESS -> CONCLUDING -> COMPLETED`` one step at a
time. Every mutation goes through :class:`InterviewOrchestrator`, which holds
the per-session lock, calls the provider, and only then writes the new state
through the :class:`~interview_session.session_store.SessionStore`. A failed
provider call therefore never leaves a partial turn behind.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from observability import log_event, span
from session_reports.models import FeedbackReport

from .errors import (
    FeedbackNotReady,
    InputError,
    ProviderError,
    SessionBusy,
    SessionCompleted,
    SessionNotFound,
)
from .feedback import FeedbackGenerator, build_report, duration_seconds
from .locks import SessionLocks
from .models import AnswerResult, FeedbackSummary, Session, SessionState, StartResult
from .prompts import CLOSING_INSTRUCTION, NEXT_QUESTION_INSTRUCTION, priming_prompt
from .provider import InterviewProvider
from .session_store import SessionStore
from .transcript import Turn, append, to_provider_messages

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InterviewOrchestrator:
    def __init__(
        self,
        store: SessionStore,
        provider: InterviewProvider,
        *,
        max_questions: int = 3,
        locks: Optional[SessionLocks] = None,
        feedback: Optional[FeedbackGenerator] = None,
        regenerate_feedback: bool = False,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_questions < 1:
            raise ValueError("max_questions must be at least 1")
        self.store = store
        self.max_questions = max_questions
        self._provider = provider
        self._locks = locks or SessionLocks()
        self._feedback = feedback or FeedbackGenerator(provider)
        self._regenerate_feedback = regenerate_feedback
        self._now = now

    def start(self, resume_text: str, job_description_text: str) -> StartResult:
        """Create a session and return its id with the opening question."""

        if not resume_text or not resume_text.strip():
            raise InputError("Resume text is required", phase="start")
        if not job_description_text or not job_description_text.strip():
            raise InputError("Job description text is required", phase="start")

        session_id = str(uuid.uuid4())
        priming = Turn.system(priming_prompt(resume_text, job_description_text))
        opening = self._complete(session_id, "start", lambda: self._provider.complete(to_provider_messages([priming])))

        session = Session(
            session_id=session_id,
            resume_text=resume_text,
            job_description_text=job_description_text,
            transcript=[priming, Turn.interviewer(opening)],
            question_count=1,
            started_at=self._now(),
        ).advance(SessionState.IN_PROGRESS)
        self.store.create(session)
        log_event("session_started", session_id, phase="start", question_count=session.question_count)
        return StartResult(session_id=session_id, message=opening)

    def submit_answer(self, session_id: str, answer: str) -> AnswerResult:
        """Record a candidate answer and return the next question or the closing remark."""

        if not session_id:
            raise InputError("Session ID is required", phase="answer")
        if not answer or not answer.strip():
            raise InputError("Answer is required", session_id=session_id, phase="answer")

        with self._hold(session_id, "answer"):
            session = self._load(session_id, "answer")
            if session.completed or session.state is SessionState.COMPLETED:
                raise SessionCompleted("Interview session is already completed", session_id=session_id, phase="answer")
            if not session.accepts_answers:
                raise SessionCompleted(
                    "Interview is concluding; end it to receive feedback",
                    session_id=session_id,
                    phase="answer",
                )

            history = append(session.transcript, Turn.candidate(answer))
            # Checked before any provider call: the answer that reaches the limit gets the closing remark.
            should_end = session.question_count >= self.max_questions

            if should_end:
                message = self._complete(
                    session_id,
                    "closing",
                    lambda: self._provider.complete(to_provider_messages(history, CLOSING_INSTRUCTION)),
                )
                # The closing remark is returned but not kept in the transcript.
                concluding = session.advance(SessionState.CONCLUDING)
                self.store.update(session_id, transcript=history, state=concluding.state)
                log_event(
                    "interview_concluding",
                    session_id,
                    phase="answer",
                    question_count=session.question_count,
                    should_end=True,
                )
            else:
                message = self._complete(
                    session_id,
                    "next_question",
                    lambda: self._provider.complete(to_provider_messages(history, NEXT_QUESTION_INSTRUCTION)),
                )
                question_count = session.question_count + 1
                self.store.update(
                    session_id,
                    transcript=append(history, Turn.interviewer(message)),
                    question_count=question_count,
                )
                log_event(
                    "answer_recorded",
                    session_id,
                    phase="answer",
                    question_count=question_count,
                    should_end=False,
                )
        return AnswerResult(message=message, should_end=should_end)

    def conclude(self, session_id: str) -> str:
        """Generate and store the final feedback, completing the session."""

        if not session_id:
            raise InputError("Session ID is required", phase="conclude")

        with self._hold(session_id, "conclude"):
            session = self._load(session_id, "conclude")
            if session.completed and session.feedback and not self._regenerate_feedback:
                log_event("session_completed", session_id, phase="conclude", outcome="already_completed")
                return session_id

            if session.state is not SessionState.COMPLETED:
                stepped = session
                while stepped.state is not SessionState.CONCLUDING:
                    stepped = stepped.advance(_next_towards_concluding(stepped.state))
                if stepped.state is not session.state:
                    self.store.update(session_id, state=stepped.state)
                session = stepped

            feedback = self._complete(session_id, "feedback", lambda: self._feedback.generate(session.transcript))
            ended_at = self._now()
            state = session.state
            if state is SessionState.CONCLUDING:
                state = session.advance(SessionState.COMPLETED).state
            self.store.update(
                session_id,
                feedback=feedback,
                ended_at=ended_at,
                completed=True,
                state=state,
            )
            log_event(
                "session_completed",
                session_id,
                phase="conclude",
                question_count=session.question_count,
                outcome="feedback_generated",
            )
        return session_id

    def get_feedback(self, session_id: str) -> FeedbackSummary:
        session = self._completed_session(session_id)
        return FeedbackSummary(
            feedback=session.feedback or "",
            duration=duration_seconds(session.started_at, session.ended_at),
            questions=session.question_count,
        )

    def get_report(self, session_id: str) -> FeedbackReport:
        return build_report(self._completed_session(session_id))

    def get_session(self, session_id: str) -> Session:
        return self._load(session_id, "get")

    def _completed_session(self, session_id: str) -> Session:
        session = self._load(session_id, "feedback")
        if not session.feedback:
            raise FeedbackNotReady(
                "Feedback not available. Please end the interview first",
                session_id=session_id,
                phase="feedback",
            )
        return session

    def _load(self, session_id: str, phase: str) -> Session:
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFound("Interview session not found", session_id=session_id, phase=phase)
        return session

    @contextmanager
    def _hold(self, session_id: str, phase: str) -> Iterator[None]:
        try:
            with self._locks.hold(session_id, phase=phase):
                yield
        except SessionBusy:
            log_event("session_busy", session_id, level=logging.WARNING, phase=phase)
            raise

    def _complete(self, session_id: str, phase: str, call: Callable[[], str]) -> str:
        """Run one provider call, re-raising failures with session context."""

        try:
            with span(session_id, phase):
                text = call()
        except ProviderError as exc:
            log_event("provider_failed", session_id, level=logging.WARNING, phase=phase, error=exc.message)
            raise type(exc)(exc.message, session_id=session_id, phase=phase) from exc
        if not text or not text.strip():
            log_event("provider_failed", session_id, level=logging.WARNING, phase=phase, error="empty content")
            raise ProviderError("Provider returned empty content", session_id=session_id, phase=phase)
        return text.strip()


def _next_towards_concluding(state: SessionState) -> SessionState:
    if state is SessionState.CREATED:
        return SessionState.IN_PROGRESS
    return SessionState.CONCLUDING


__all__ = ["InterviewOrchestrator"]
