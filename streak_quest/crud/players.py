from typing import Callable, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.crud.base import CRUDBase
from streak_quest.models.player import Player
from streak_quest.schemas.player import PlayerResponse


class CRUDPlayer(CRUDBase[Player, PlayerResponse, PlayerResponse]):
    async def get_by_address(self, db: AsyncSession, address: str) -> Player:
        """Return the player's record, or a detached zero record if none exists yet."""
        result = await db.execute(select(Player).where(Player.address == address))
        player = result.scalar_one_or_none()
        if player is None:
            return Player.blank(address)
        return player

    async def upsert(
        self, db: AsyncSession, address: str, mutator: Callable[[Player], None]
    ) -> Player:
        """Load or create the player row and apply ``mutator`` in the current transaction."""
        result = await db.execute(select(Player).where(Player.address == address))
        player = result.scalar_one_or_none()
        if player is None:
            player = Player.blank(address)
            db.add(player)
        mutator(player)
        await db.flush()
        return player

    async def get_ranked_candidates(
        self, db: AsyncSession, week: int | None = None
    ) -> Sequence[Player]:
        """Players with weekly points or a live streak, in insertion order."""
        query = select(Player).where(
            or_(Player.weekly_base_points > 0, Player.current_streak > 0)
        )
        if week is not None:
            query = query.where(Player.player_week == week)
        result = await db.execute(query.order_by(Player.id))
        return result.scalars().all()


crud_player = CRUDPlayer(Player)
