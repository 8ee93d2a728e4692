"""Shared constants and doubles for functional tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List

TODAY = date(2026, 6, 15)


def days_ago(n: int) -> str:
    return (TODAY - timedelta(days=n)).isoformat()


def days_after(iso: str, n: int) -> str:
    return (date.fromisoformat(iso) + timedelta(days=n)).isoformat()


class RecordingSubmitter:
    """Lead submitter double that records calls and returns a canned outcome."""

    def __init__(self, outcome: Any = None, raises: Exception | None = None) -> None:
        self.outcome = outcome if outcome is not None else {"status": "ok", "message": "lead-1"}
        self.raises = raises
        self.calls: List[Dict[str, Any]] = []

    async def __call__(self, answers, contact, is_test_mode):
        self.calls.append({"answers": answers, "contact": contact, "is_test_mode": is_test_mode})
        if self.raises is not None:
            raise self.raises
        return self.outcome
