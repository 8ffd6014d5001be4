from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator
from streak_quest.auth.capabilities import normalize_address
from streak_quest.models.game_event import GameEventType


class JoinWeekRequest(BaseModel):
    paid_amount: int = Field(..., ge=0, description="Entry payment in wei")


class AttesterCompleteRequest(BaseModel):
    player_address: str
    task_id: int = Field(..., ge=0)

    @field_validator("player_address")
    @classmethod
    def check_address(cls, v: str) -> str:
        return normalize_address(v)


class GameStateResponse(BaseModel):
    entry_fee: int
    current_week: int
    weekly_prize_pool: int
    time_until_week_end: int
    daily_task_cap: int


class LeaderboardResponse(BaseModel):
    """Parallel arrays in rank order."""

    addresses: list[str]
    streaks: list[int]
    points: list[int]


class GameEventResponse(BaseModel):
    model_config = {"from_attributes": True}
    id: int
    event_type: GameEventType
    week: int
    player_address: Optional[str]
    payload: dict[str, Any]
    occurred_at: int
