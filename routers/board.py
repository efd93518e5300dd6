from __future__ import annotations

from fastapi import APIRouter, HTTPException

from bank import get_board, row_count
from schemas.board import BoardOut

router = APIRouter(tags=["board"])


@router.get("/board", response_model=BoardOut)
def board():
    categories = get_board()
    if categories is None:
        raise HTTPException(status_code=503, detail="board not loaded")
    # answers never leave the server
    return {
        "ok": True,
        "rows": row_count(categories),
        "categories": [
            {
                "title": c.title,
                "tiles": [{"row": i, "value": q.value} for i, q in enumerate(c.questions)],
            }
            for c in categories
        ],
    }
