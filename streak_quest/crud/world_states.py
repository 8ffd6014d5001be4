from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.config import Settings
from streak_quest.crud.base import CRUDBase
from streak_quest.models.world_state import WORLD_STATE_ID, WorldState
from streak_quest.schemas.game import GameStateResponse
from streak_quest.services import clock


class CRUDWorldState(CRUDBase[WorldState, GameStateResponse, GameStateResponse]):
    async def get_current(self, db: AsyncSession) -> Optional[WorldState]:
        return await self.get(db, WORLD_STATE_ID)

    async def get_or_create(
        self, db: AsyncSession, settings: Settings, now: Optional[int] = None
    ) -> WorldState:
        """Load the singleton; on first use it starts at the week containing ``now``."""
        world = await self.get_current(db)
        if world is not None:
            return world
        rules = clock.GameRules(
            launch_timestamp=settings.GAME_LAUNCH_TIMESTAMP,
            week_length=settings.WEEK_LENGTH_SECONDS,
            day_length=settings.DAY_LENGTH_SECONDS,
            daily_task_cap=settings.DAILY_TASK_CAP,
        )
        now = clock.now() if now is None else now
        return await self.create(
            db,
            obj_in={
                "id": WORLD_STATE_ID,
                "launch_timestamp": rules.launch_timestamp,
                "week_length_seconds": rules.week_length,
                "day_length_seconds": rules.day_length,
                "daily_task_cap": rules.daily_task_cap,
                "entry_fee": settings.ENTRY_FEE_WEI,
                "current_week": clock.week_index_of(rules, now),
                "weekly_prize_pool": 0,
            },
        )


crud_world_state = CRUDWorldState(WorldState)
