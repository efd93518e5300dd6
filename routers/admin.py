from __future__ import annotations

from fastapi import APIRouter, Depends

from bank import reload_bank
from deps.auth import require_admin

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reload", dependencies=[Depends(require_admin)])
def reload_board():
    n = reload_bank()
    if not n:
        return {"ok": False, "count": 0, "error": "board load failed; see server log"}
    return {"ok": True, "count": n}
