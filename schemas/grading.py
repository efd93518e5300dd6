# schemas/grading.py
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

# Edit distance is quadratic in input length; keep submissions short
LEN_LIMIT = 200

MatchedBy = Literal["numeric", "substring", "fuzzy", "none"]


class GradingVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    accepted: bool
    normalized_user: str
    normalized_correct: str
    edit_distance: int
    matched_by: MatchedBy
    # diagnostics
    phrase_valid: bool
    allowed_distance: int
    similarity: float


# ---------- Grade single ----------


class GradeRequest(BaseModel):
    answer: str = Field(max_length=LEN_LIMIT)
    correct: str = Field(max_length=LEN_LIMIT)


# ---------- Grade batch ----------


class GradeBatchRequest(BaseModel):
    items: List[GradeRequest] = Field(max_length=100)


class GradeBatchResponse(BaseModel):
    ok: bool
    total: int
    accepted: int
    results: List[GradingVerdict]
