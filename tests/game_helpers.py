"""Shared constants and setup helpers for game tests."""

from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.auth.capabilities import CallerContext
from streak_quest.models.task import QuestTask, TaskType
from streak_quest.models.world_state import WorldState
from streak_quest.schemas.task import TaskCreate
from streak_quest.services import game_engine

CURATOR = "0x" + "c" * 40
ATTESTER = "0x" + "a" * 40

LAUNCH = 1_700_000_000
DAY = 24 * 3600
WEEK = 7 * DAY
ENTRY_FEE = 10_000_000_000_000  # 0.00001 ETH
T0 = LAUNCH + 3600  # one hour into week 0


async def add_task(
    db: AsyncSession,
    world: WorldState,
    curator: CallerContext,
    reward: int = 100,
    task_type: TaskType = TaskType.onchain,
    description: str = "Swap any token on a Base DEX",
    now: int = T0,
) -> QuestTask:
    return await game_engine.add_task(
        db,
        world,
        curator,
        TaskCreate(description=description, task_type=task_type, base_points_reward=reward),
        now,
    )


async def join(db: AsyncSession, world: WorldState, caller: CallerContext, now: int = T0):
    return await game_engine.join_week(db, world, caller, ENTRY_FEE, now)
