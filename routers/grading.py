from __future__ import annotations

from fastapi import APIRouter

from grading import grade_answer
from schemas.grading import (
    GradeBatchRequest,
    GradeBatchResponse,
    GradeRequest,
    GradingVerdict,
)

router = APIRouter(tags=["grading"])


@router.post("/grade", response_model=GradingVerdict)
def grade(req: GradeRequest):
    return grade_answer(req.answer, req.correct)


@router.post("/grade-batch", response_model=GradeBatchResponse)
def grade_batch(req: GradeBatchRequest):
    results = [grade_answer(it.answer, it.correct) for it in req.items]
    return {
        "ok": True,
        "total": len(results),
        "accepted": sum(1 for v in results if v.accepted),
        "results": results,
    }
