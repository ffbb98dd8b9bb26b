from __future__ import annotations

import threading

import pytest

from interview_session import SessionBusy, SessionLocks


def test_second_holder_is_rejected_while_first_is_active():
    locks = SessionLocks()
    with locks.hold("s-1"):
        with pytest.raises(SessionBusy) as excinfo:
            with locks.hold("s-1", phase="answer"):
                pass
        assert excinfo.value.status_code == 409
        assert excinfo.value.phase == "answer"
        # Other sessions are independent.
        with locks.hold("s-2"):
            pass
    assert len(locks) == 0


def test_waiting_holder_acquires_after_release():
    locks = SessionLocks(timeout_s=2.0)
    entered = threading.Event()
    release = threading.Event()
    order = []

    def first():
        with locks.hold("s-1"):
            entered.set()
            release.wait(2)
            order.append("first")

    worker = threading.Thread(target=first)
    worker.start()
    entered.wait(2)
    release.set()
    with locks.hold("s-1"):
        order.append("second")
    worker.join()

    assert order == ["first", "second"]
    assert len(locks) == 0
