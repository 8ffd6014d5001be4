from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from streak_quest.crud.base import CRUDBase
from streak_quest.models.week_closure import WeekClosure
from streak_quest.schemas.treasury import WeekClosureResponse


class CRUDWeekClosure(CRUDBase[WeekClosure, WeekClosureResponse, WeekClosureResponse]):
    async def get_by_week(self, db: AsyncSession, week: int) -> Optional[WeekClosure]:
        result = await db.execute(
            select(WeekClosure)
            .where(WeekClosure.week == week)
            .options(selectinload(WeekClosure.payouts))
        )
        return result.scalar_one_or_none()


crud_week_closure = CRUDWeekClosure(WeekClosure)
