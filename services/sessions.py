"""Helpers for building and sharing the interview orchestrator."""
from __future__ import annotations

import threading
from typing import Optional

from config import Settings, route_from_settings, settings as default_settings
from interview_session import (
    GatewayProvider,
    InterviewOrchestrator,
    InterviewProvider,
    SessionCache,
    SessionLocks,
    SessionStore,
)

_ORCHESTRATOR: Optional[InterviewOrchestrator] = None
_GUARD = threading.Lock()


def build_orchestrator(
    cfg: Optional[Settings] = None,
    *,
    provider: Optional[InterviewProvider] = None,
) -> InterviewOrchestrator:
    """Wire cache, durable store, locks and provider from ``cfg``."""

    cfg = cfg or default_settings
    store = SessionStore(SessionCache(capacity=cfg.SESSION_CACHE_SIZE, ttl_s=cfg.SESSION_CACHE_TTL_S))
    return InterviewOrchestrator(
        store,
        provider or GatewayProvider(route_from_settings(cfg)),
        max_questions=cfg.MAX_QUESTIONS,
        locks=SessionLocks(timeout_s=cfg.SESSION_LOCK_TIMEOUT_S),
        regenerate_feedback=cfg.FEEDBACK_REGENERATE,
    )


def get_orchestrator() -> InterviewOrchestrator:
    """Return the process-wide orchestrator, building it on first use."""

    global _ORCHESTRATOR
    with _GUARD:
        if _ORCHESTRATOR is None:
            _ORCHESTRATOR = build_orchestrator()
        return _ORCHESTRATOR


def reset_orchestrator(orchestrator: Optional[InterviewOrchestrator] = None) -> None:
    """Replace (or clear) the shared orchestrator."""

    global _ORCHESTRATOR
    with _GUARD:
        _ORCHESTRATOR = orchestrator
