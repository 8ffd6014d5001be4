from pydantic import BaseModel, Field


class PlayerResponse(BaseModel):
    model_config = {"from_attributes": True}
    address: str
    current_streak: int
    longest_streak: int
    total_base_points: int
    weekly_base_points: int
    total_tasks_completed: int
    active_this_week: bool
    player_week: int
    joined_week: int
    last_check_in_time: int
    tasks_completed_today: int = Field(..., ge=0)
    last_task_reset_time: int


class PlayerStatusResponse(BaseModel):
    address: str
    has_joined_current_week: bool
    is_active_this_week: bool
    player_week: int
    current_week: int


class DayResetResponse(BaseModel):
    address: str
    seconds_until_day_reset: int


class PlayerWeekInfoResponse(BaseModel):
    address: str
    player_week: int
    current_week: int
    time_until_week_end: int
    time_until_day_reset: int
