import enum
from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, Boolean, Enum, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from streak_quest.models.base import Base, TimestampMixin


class TaskType(str, enum.Enum):
    onchain = "onchain"
    offchain = "offchain"
    hybrid = "hybrid"


class QuestTask(Base, TimestampMixin):
    __tablename__ = "quest_tasks"
    __table_args__ = (UniqueConstraint("week", "position", name="uq_task_week_position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    week: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)  # task id within the week
    description: Mapped[str] = mapped_column(Text, nullable=False)
    task_type: Mapped[TaskType] = mapped_column(
        Enum(TaskType), nullable=False, default=TaskType.onchain
    )
    base_points_reward: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # Opaque to the engine (e.g. bridge provider hints for the UI)
    task_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True
    )
