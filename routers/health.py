from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from alembic.config import Config
from alembic.script import ScriptDirectory
from bank import get_board
from db import engine

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")


@router.get("/board")
def health_board():
    categories = get_board()
    if categories is None:
        return {"ok": False, "categories": 0, "questions": 0}
    return {
        "ok": True,
        "categories": len(categories),
        "questions": sum(len(c.questions) for c in categories),
    }


def _alembic_heads() -> list[str]:
    script = ScriptDirectory.from_config(Config("alembic.ini"))
    return list(script.get_heads())


@router.get("/migrations")
def health_migrations():
    try:
        heads = _alembic_heads()
    except Exception as e:
        return {"ok": False, "error": f"alembic_config: {e}", "code_heads": [], "db_version": None}

    try:
        with engine.connect() as conn:
            try:
                db_ver = conn.execute(
                    text("SELECT version_num FROM alembic_version")
                ).scalar_one_or_none()
            except Exception:
                # table missing: migrations never ran
                db_ver = None
    except Exception as e:
        return {
            "ok": False,
            "error": f"db_connect_failed: {e}",
            "code_heads": heads,
            "db_version": None,
        }

    synced = db_ver in heads
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
