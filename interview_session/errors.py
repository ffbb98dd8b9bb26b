from __future__ import annotations  # Typed errors raised by the interview session core

from typing import Optional


class InterviewError(Exception):  # Base error carrying HTTP status and session context
    status_code = 500

    def __init__(self, message: str, *, session_id: Optional[str] = None, phase: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.session_id = session_id
        self.phase = phase

    def __str__(self) -> str:
        context = [f"{key}={value}" for key, value in (("session", self.session_id), ("phase", self.phase)) if value]
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class InputError(InterviewError):  # Missing or invalid caller-supplied fields
    status_code = 400


class DocumentError(InputError):  # Document could not be turned into usable text
    pass


class UploadError(InputError):  # Upload rejected before reaching the interview core
    pass


class SessionNotFound(InterviewError):  # Unknown session id in both cache and durable store
    status_code = 404


class SessionCompleted(InterviewError):  # Session no longer accepts candidate turns
    status_code = 400


class FeedbackNotReady(InterviewError):  # Feedback requested before the interview was concluded
    status_code = 400


class SessionBusy(InterviewError):  # Another mutating call currently holds the session
    status_code = 409


class ProviderError(InterviewError):  # Generative backend failed or returned unusable content
    status_code = 502


class ProviderTimeout(ProviderError):  # Generative backend exceeded the configured timeout
    status_code = 504


class DurableStoreError(InterviewError):  # Persistence layer failure
    status_code = 500


class InvalidTransition(RuntimeError):  # Programming error: state machine step not allowed
    pass


__all__ = [
    "DocumentError",
    "DurableStoreError",
    "FeedbackNotReady",
    "InputError",
    "InterviewError",
    "InvalidTransition",
    "ProviderError",
    "ProviderTimeout",
    "SessionBusy",
    "SessionCompleted",
    "SessionNotFound",
    "UploadError",
]
