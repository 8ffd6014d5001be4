"""Serialized, all-or-nothing write transactions over the game ledger."""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.config import get_settings
from streak_quest.crud import crud_world_state
from streak_quest.models.world_state import WorldState
from streak_quest.services import clock, game_engine

# One state-changing call at a time per event loop; the week index read and
# the rollover it decides happen under the same lock.
_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


def _ledger_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _locks.get(loop)
    if lock is None:
        lock = _locks[loop] = asyncio.Lock()
    return lock


@asynccontextmanager
async def ledger_transaction(
    db: AsyncSession, now: Optional[int] = None
) -> AsyncIterator[WorldState]:
    """Yield the world state; commit if the block returns, roll back if it raises.

    A due week rollover (closure, settlement) is committed on its own before
    the block runs, so a write rejected afterwards cannot undo it and the
    next write never closes or settles the same week again.
    """
    now = clock.now() if now is None else now
    async with _ledger_lock():
        try:
            world = await crud_world_state.get_or_create(db, get_settings(), now)
            await game_engine.ensure_current_week(db, world, now)
            await db.commit()
            yield world
            await db.commit()
        except Exception:
            await db.rollback()
            raise
