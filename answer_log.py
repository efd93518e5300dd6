# Writes resolved questions to the answers table.

from __future__ import annotations

import logging
from typing import Any, Dict, List

from db import SessionLocal
from models import AnswerRecord

logger = logging.getLogger("trivia-board.answers")


def _to_record(session_id: str, outcome: Dict[str, Any]) -> AnswerRecord:
    verdict = outcome.get("verdict")
    return AnswerRecord(
        session_id=session_id,
        player=outcome.get("player"),
        category=outcome["category"],
        prompt=outcome["prompt"],
        answer=outcome.get("answer"),
        correct_answer=outcome["correct_answer"],
        value=outcome["value"],
        accepted=bool(outcome.get("accepted")),
        delta=outcome["delta"],
        matched_by=verdict.matched_by if verdict is not None else "none",
        timed_out=bool(outcome.get("timed_out")),
    )


def save_outcomes(session_id: str, outcomes: List[Dict[str, Any]]) -> None:
    """
    Best effort: sets outcome["record_id"] on success. A database failure is
    logged and leaves record_id as None; the game carries on either way.
    """
    if not outcomes:
        return
    try:
        with SessionLocal() as db:
            records = [_to_record(session_id, o) for o in outcomes]
            db.add_all(records)
            db.commit()
            for o, r in zip(outcomes, records):
                o["record_id"] = r.id
    except Exception:
        logger.warning("could not record %d answer(s) for session=%s", len(outcomes), session_id, exc_info=True)
