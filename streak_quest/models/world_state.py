from sqlalchemy import BigInteger, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from streak_quest.models.base import Base, TimestampMixin, WeiAmount
from streak_quest.services.clock import GameRules

WORLD_STATE_ID = 1


class WorldState(Base, TimestampMixin):
    """Singleton row holding the game clock, the current week and its prize pool."""

    __tablename__ = "world_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=WORLD_STATE_ID)
    launch_timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    week_length_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    day_length_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    daily_task_cap: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=3)
    entry_fee: Mapped[int] = mapped_column(WeiAmount, nullable=False)
    current_week: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    weekly_prize_pool: Mapped[int] = mapped_column(WeiAmount, default=0, nullable=False)

    @property
    def rules(self) -> GameRules:
        return GameRules(
            launch_timestamp=self.launch_timestamp,
            week_length=self.week_length_seconds,
            day_length=self.day_length_seconds,
            daily_task_cap=self.daily_task_cap,
        )
