"""Central in-memory state holders.

Sessions are process-local and never shared between users; each entry owns
its own catalog, answer store and flow state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:  # pragma: no cover
    from claimcheck.logic.sessions import Session

# Session registry: session_id -> Session
SESSIONS: Dict[str, "Session"] = {}


def clear_all() -> None:
    SESSIONS.clear()


__all__ = ["SESSIONS", "clear_all"]
