from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AnswerRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    session_id: str
    player: str | None = None
    category: str
    prompt: str
    answer: str | None = None
    correct_answer: str
    value: int
    accepted: bool
    delta: int
    matched_by: str
    timed_out: bool
