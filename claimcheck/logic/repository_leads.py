"""Repository functions for captured leads.

Plain SQL through the shared SQLAlchemy engine; no ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
import json
import logging
import uuid

from sqlalchemy import text as sql_text

from claimcheck.db.base import get_engine

logger = logging.getLogger(__name__)


def insert_lead(answers: Mapping[str, Any], contact: Mapping[str, Any], is_test: bool) -> str:
    """Persist one lead and return its generated id."""
    lead_id = str(uuid.uuid4())
    created_at = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    eng = get_engine()
    with eng.begin() as conn:
        conn.execute(
            sql_text(
                """
                INSERT INTO lead_submission (lead_id, answers_json, contact_json, is_test, created_at)
                VALUES (:lead_id, :answers, :contact, :is_test, :created_at)
                """
            ),
            {
                "lead_id": lead_id,
                "answers": json.dumps(dict(answers), sort_keys=True),
                "contact": json.dumps(dict(contact), sort_keys=True),
                "is_test": bool(is_test),
                "created_at": created_at,
            },
        )
    logger.info("lead_inserted lead_id=%s is_test=%s", lead_id, is_test)
    return lead_id


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "lead_id": str(row[0]),
        "answers": json.loads(row[1]),
        "contact": json.loads(row[2]),
        "is_test": bool(row[3]),
        "created_at": str(row[4]),
    }


def get_lead(lead_id: str) -> Optional[Dict[str, Any]]:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text(
                "SELECT lead_id, answers_json, contact_json, is_test, created_at "
                "FROM lead_submission WHERE lead_id = :lead_id"
            ),
            {"lead_id": lead_id},
        ).fetchone()
    return _row_to_dict(row) if row else None


def list_leads() -> List[Dict[str, Any]]:
    eng = get_engine()
    with eng.connect() as conn:
        rows = conn.execute(
            sql_text(
                "SELECT lead_id, answers_json, contact_json, is_test, created_at "
                "FROM lead_submission ORDER BY created_at ASC, lead_id ASC"
            )
        ).fetchall()
    return [_row_to_dict(r) for r in rows]


def delete_all_leads() -> None:
    eng = get_engine()
    with eng.begin() as conn:
        conn.execute(sql_text("DELETE FROM lead_submission"))


__all__ = ["insert_lead", "get_lead", "list_leads", "delete_all_leads"]
