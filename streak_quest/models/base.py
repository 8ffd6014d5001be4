from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )


class WeiAmount(TypeDecorator):
    """Native-value amount stored as a decimal string so uint256 values round-trip exactly."""

    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = int(value)
        if value < 0:
            raise ValueError("wei amounts cannot be negative")
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
