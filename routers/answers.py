from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from db import SessionLocal
from deps.auth import require_client
from models import AnswerRecord
from schemas.answers import AnswerRecordOut

router = APIRouter(prefix="/answers", tags=["answers"], dependencies=[Depends(require_client)])


@router.get("/recent-list")
def answers_recent(
    limit: int = Query(default=20),
    session_id: Optional[str] = None,
):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        q = db.query(AnswerRecord)
        if session_id:
            q = q.filter(AnswerRecord.session_id == session_id)
        items = q.order_by(AnswerRecord.created_at.desc(), AnswerRecord.id.desc()).limit(limit).all()

    rows = [AnswerRecordOut.model_validate(a).model_dump(mode="json") for a in items]
    return {"ok": True, "items": rows, "count": len(rows)}


@router.get("/{record_id}", response_model=AnswerRecordOut)
def get_answer(record_id: int):
    with SessionLocal() as db:
        rec = db.get(AnswerRecord, record_id)
        if not rec:
            raise HTTPException(status_code=404, detail="answer not found")
        return AnswerRecordOut.model_validate(rec)
