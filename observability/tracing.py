"""Simple span helper for recording provider and store timings."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

from .logger import log_event


@contextmanager
def span(session_id: str | None, name: str, **fields: Any) -> Iterator[None]:
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        log_event(
            "span",
            session_id,
            level=logging.INFO if outcome == "ok" else logging.WARNING,
            node=name,
            ms=elapsed_ms,
            outcome=outcome,
            **fields,
        )


__all__ = ["span"]
