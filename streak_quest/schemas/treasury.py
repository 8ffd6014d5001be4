from typing import Any, Optional
from pydantic import BaseModel
from streak_quest.models.week_closure import ClosureStatus


class PayoutResponse(BaseModel):
    model_config = {"from_attributes": True}
    week: int
    address: str
    rank: int
    amount: int


class WeekClosureResponse(BaseModel):
    model_config = {"from_attributes": True}
    week: int
    prize_pool: int
    closed_at: int
    entrants: list[dict[str, Any]]
    status: ClosureStatus
    settled_amount: int
    treasury_remainder: int
    failure_reason: Optional[str]
    payouts: list[PayoutResponse] = []
