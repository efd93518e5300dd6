# schemas/board.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class QuestionModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int
    question: str
    answer: str


class CategoryModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    questions: List[QuestionModel]


# ---------- Public board (answers hidden) ----------


class TileOut(BaseModel):
    row: int
    value: int


class CategoryOut(BaseModel):
    title: str
    tiles: List[TileOut]


class BoardOut(BaseModel):
    ok: bool
    rows: int
    categories: List[CategoryOut]
