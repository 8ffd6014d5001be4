from sqlalchemy import BigInteger, Boolean, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from streak_quest.models.base import Base, TimestampMixin


class Player(Base, TimestampMixin):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(42), unique=True, nullable=False, index=True)
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_base_points: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    weekly_base_points: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total_tasks_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    active_this_week: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    player_week: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    # unix seconds; 0 = never
    last_check_in_time: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    tasks_completed_today: Mapped[int] = mapped_column(SmallInteger, default=0, nullable=False)
    last_task_reset_time: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    @classmethod
    def blank(cls, address: str) -> "Player":
        """Zero-valued record for an address that has never interacted."""
        return cls(
            address=address,
            current_streak=0,
            longest_streak=0,
            total_base_points=0,
            weekly_base_points=0,
            total_tasks_completed=0,
            active_this_week=False,
            player_week=0,
            last_check_in_time=0,
            tasks_completed_today=0,
            last_task_reset_time=0,
        )

    @property
    def joined_week(self) -> int:
        return self.player_week
