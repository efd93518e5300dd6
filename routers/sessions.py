from __future__ import annotations

from fastapi import APIRouter, HTTPException

import config
from answer_log import save_outcomes
from bank import get_board
from game import GameSession, SessionError, SessionNotFound, TileNotFound, store
from schemas.sessions import (
    AnswerRequest,
    BuzzRequest,
    CreateSessionRequest,
    OpenTileRequest,
    OutcomeOut,
    SessionOut,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get(session_id: str) -> GameSession:
    try:
        return store.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="session not found")


def _record(session: GameSession) -> None:
    save_outcomes(session.id, session.drain_unrecorded())


@router.post("", response_model=SessionOut, status_code=201)
def create_session(req: CreateSessionRequest):
    categories = get_board()
    if categories is None:
        raise HTTPException(status_code=503, detail="board not loaded")
    with store.lock:
        try:
            session = store.create(categories, req.players, config.ANSWER_SECONDS)
        except SessionError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return session.snapshot()


@router.get("/{session_id}", response_model=SessionOut)
def get_session(session_id: str):
    with store.lock:
        session = _get(session_id)
        session.tick()
        _record(session)
        return session.snapshot()


@router.post("/{session_id}/tiles", response_model=SessionOut)
def open_tile(session_id: str, req: OpenTileRequest):
    with store.lock:
        session = _get(session_id)
        try:
            session.open_tile(req.category, req.row)
        except TileNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except SessionError as e:
            raise HTTPException(status_code=409, detail=str(e))
        finally:
            _record(session)
        return session.snapshot()


@router.post("/{session_id}/buzz", response_model=SessionOut)
def buzz(session_id: str, req: BuzzRequest):
    with store.lock:
        session = _get(session_id)
        try:
            session.buzz(req.player)
        except SessionError as e:
            raise HTTPException(status_code=409, detail=str(e))
        finally:
            _record(session)
        return session.snapshot()


@router.post("/{session_id}/answer", response_model=OutcomeOut)
def answer(session_id: str, req: AnswerRequest):
    with store.lock:
        session = _get(session_id)
        try:
            outcome = session.submit(req.player, req.answer)
        except SessionError as e:
            raise HTTPException(status_code=409, detail=str(e))
        finally:
            _record(session)
        return outcome


@router.post("/{session_id}/timeout", response_model=OutcomeOut)
def timeout(session_id: str):
    with store.lock:
        session = _get(session_id)
        try:
            outcome = session.expire()
        except SessionError as e:
            raise HTTPException(status_code=409, detail=str(e))
        finally:
            _record(session)
        return outcome


@router.post("/{session_id}/close", response_model=SessionOut)
def close(session_id: str):
    with store.lock:
        session = _get(session_id)
        try:
            session.close()
        except SessionError as e:
            raise HTTPException(status_code=409, detail=str(e))
        finally:
            _record(session)
        return session.snapshot()
