import enum
from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from streak_quest.models.base import Base, TimestampMixin, WeiAmount


class ClosureStatus(str, enum.Enum):
    pending = "pending"
    settled = "settled"
    failed = "failed"


class WeekClosure(Base, TimestampMixin):
    """Snapshot of a finished week handed to the treasury for settlement."""

    __tablename__ = "week_closures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    week: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    prize_pool: Mapped[int] = mapped_column(WeiAmount, nullable=False)
    closed_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # Ranked [{"address", "streak", "points"}, ...] at close time
    entrants: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[ClosureStatus] = mapped_column(
        Enum(ClosureStatus), nullable=False, default=ClosureStatus.pending
    )
    settled_amount: Mapped[int] = mapped_column(WeiAmount, nullable=False, default=0)
    treasury_remainder: Mapped[int] = mapped_column(WeiAmount, nullable=False, default=0)
    failure_reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    payouts: Mapped[list["Payout"]] = relationship(
        "Payout", back_populates="closure", order_by="Payout.rank"
    )


class Payout(Base, TimestampMixin):
    __tablename__ = "payouts"
    __table_args__ = (UniqueConstraint("week", "address", name="uq_payout_week_address"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    closure_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("week_closures.id"), nullable=False
    )
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[int] = mapped_column(WeiAmount, nullable=False)

    closure: Mapped["WeekClosure"] = relationship("WeekClosure", back_populates="payouts")
