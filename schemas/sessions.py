# schemas/sessions.py
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from schemas.grading import LEN_LIMIT, GradingVerdict


class CreateSessionRequest(BaseModel):
    players: List[str] = Field(default_factory=lambda: ["Player 1"], min_length=1)


class OpenTileRequest(BaseModel):
    category: int = Field(ge=0)
    row: int = Field(ge=0)


class BuzzRequest(BaseModel):
    player: str


class AnswerRequest(BaseModel):
    # optional in single-player sessions
    player: Optional[str] = None
    answer: str = Field(max_length=LEN_LIMIT)


class OpenQuestionOut(BaseModel):
    category: int
    category_title: str
    row: int
    prompt: str
    value: int
    buzzed: Optional[str] = None
    seconds_left: float


class OutcomeOut(BaseModel):
    ok: bool
    player: Optional[str] = None
    accepted: bool
    timed_out: bool
    delta: int
    correct_answer: str
    verdict: Optional[GradingVerdict] = None
    scores: Dict[str, int]
    record_id: Optional[int] = None


class SessionOut(BaseModel):
    id: str
    players: List[str]
    scores: Dict[str, int]
    used: List[List[int]]
    current: Optional[OpenQuestionOut] = None
    # set when the countdown resolved a question since the last request
    last_outcome: Optional[OutcomeOut] = None
