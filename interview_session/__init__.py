from __future__ import annotations  # Interview session core exports

from .errors import (
    DocumentError,
    DurableStoreError,
    FeedbackNotReady,
    InputError,
    InterviewError,
    InvalidTransition,
    ProviderError,
    ProviderTimeout,
    SessionBusy,
    SessionCompleted,
    SessionNotFound,
    UploadError,
)
from .feedback import FeedbackGenerator, build_report, duration_seconds
from .locks import SessionLocks
from .models import AnswerResult, FeedbackSummary, Session, SessionState, StartResult
from .orchestrator import InterviewOrchestrator
from .provider import GatewayProvider, InterviewProvider
from .session_store import SessionCache, SessionStore
from .transcript import Turn

__all__ = [
    "AnswerResult",
    "DocumentError",
    "DurableStoreError",
    "FeedbackGenerator",
    "FeedbackNotReady",
    "FeedbackSummary",
    "GatewayProvider",
    "InputError",
    "InterviewError",
    "InterviewOrchestrator",
    "InterviewProvider",
    "InvalidTransition",
    "ProviderError",
    "ProviderTimeout",
    "Session",
    "SessionBusy",
    "SessionCache",
    "SessionCompleted",
    "SessionLocks",
    "SessionNotFound",
    "SessionState",
    "SessionStore",
    "StartResult",
    "Turn",
    "build_report",
    "duration_seconds",
]
