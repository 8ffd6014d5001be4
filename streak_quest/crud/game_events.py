from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.crud.base import CRUDBase
from streak_quest.models.game_event import GameEvent, GameEventType
from streak_quest.schemas.game import GameEventResponse


class CRUDGameEvent(CRUDBase[GameEvent, GameEventResponse, GameEventResponse]):
    async def record(
        self,
        db: AsyncSession,
        event_type: GameEventType,
        *,
        week: int,
        occurred_at: int,
        player_address: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> GameEvent:
        return await self.create(
            db,
            obj_in={
                "event_type": event_type,
                "week": week,
                "player_address": player_address,
                "payload": payload or {},
                "occurred_at": occurred_at,
            },
        )

    async def list_events(
        self,
        db: AsyncSession,
        player_address: Optional[str] = None,
        week: Optional[int] = None,
        limit: int = 100,
    ) -> Sequence[GameEvent]:
        query = select(GameEvent)
        if player_address:
            query = query.where(GameEvent.player_address == player_address)
        if week is not None:
            query = query.where(GameEvent.week == week)
        query = query.order_by(GameEvent.id.desc()).limit(limit)
        result = await db.execute(query)
        return result.scalars().all()


crud_game_event = CRUDGameEvent(GameEvent)
