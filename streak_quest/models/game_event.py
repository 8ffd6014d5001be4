import enum
from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from streak_quest.models.base import Base, TimestampMixin


class GameEventType(str, enum.Enum):
    player_joined = "PlayerJoined"
    task_completed = "TaskCompleted"
    streak_updated = "StreakUpdated"
    week_closed = "WeekClosed"


class GameEvent(Base, TimestampMixin):
    __tablename__ = "game_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_type: Mapped[GameEventType] = mapped_column(Enum(GameEventType), nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    player_address: Mapped[Optional[str]] = mapped_column(String(42), nullable=True, index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    occurred_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
