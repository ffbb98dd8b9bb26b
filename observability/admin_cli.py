"""Lightweight CLI helpers for inspecting stored interview sessions."""
from __future__ import annotations

import argparse
from typing import List, Optional

from storage.sessions import fetch_session, list_sessions


def _clip(text: str, limit: int = 100) -> str:
    compact = " ".join(text.split())
    return compact if len(compact) <= limit else compact[: limit - 3] + "..."


def tail_sessions(limit: int = 20) -> None:
    for row in list_sessions(limit):
        feedback = "yes" if row["feedback"] else "no"
        print(
            f"[{row['started_at']}] {row['session_id']} state={row['state']} "
            f"questions={row['question_count']} turns={len(row['transcript'])} feedback={feedback}"
        )


def show_session(session_id: str) -> bool:
    row = fetch_session(session_id)
    if row is None:
        print(f"session {session_id} not found")
        return False
    print(f"session {row['session_id']} state={row['state']} questions={row['question_count']}")
    print(f"started={row['started_at']} ended={row['ended_at'] or '-'}")
    for index, turn in enumerate(row["transcript"], start=1):
        print(f"  {index:>2} {turn['role']:<11} {_clip(turn['content'])}")
    if row["feedback"]:
        print("feedback:")
        print(row["feedback"])
    return True


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect interview sessions in the durable store")
    parser.add_argument("--tail-sessions", type=int, help="Show the most recently started sessions")
    parser.add_argument("--show", metavar="SESSION_ID", help="Print one session's transcript and feedback")
    args = parser.parse_args(argv)

    status = 0
    if args.tail_sessions:
        tail_sessions(args.tail_sessions)
    if args.show and not show_session(args.show):
        status = 1
    return status


if __name__ == "__main__":
    raise SystemExit(main())
