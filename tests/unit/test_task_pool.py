"""Curator task pool: append-only per week, positional ids, activation toggle."""

import pytest

from streak_quest.models.task import TaskType
from streak_quest.schemas.task import TaskCreate
from streak_quest.services import game_engine
from streak_quest.services.errors import TaskNotFound, Unauthorized

from game_helpers import LAUNCH, T0, WEEK, add_task


@pytest.mark.asyncio
async def test_task_ids_are_positions(db, world, curator):
    first = await add_task(db, world, curator, description="Bridge to Base")
    second = await add_task(db, world, curator, reward=50, task_type=TaskType.offchain)

    assert (first.position, second.position) == (0, 1)
    tasks = await game_engine.get_current_week_tasks(db, world)
    assert [(t.position, t.base_points_reward, t.task_type) for t in tasks] == [
        (0, 100, TaskType.onchain),
        (1, 50, TaskType.offchain),
    ]
    assert all(t.is_active for t in tasks)


@pytest.mark.asyncio
async def test_only_curator_adds_tasks(db, world, alice):
    with pytest.raises(Unauthorized):
        await add_task(db, world, alice)
    assert await game_engine.get_current_week_tasks(db, world) == []


@pytest.mark.asyncio
async def test_batch_add_keeps_order(db, world, curator):
    tasks = await game_engine.add_tasks(
        db,
        world,
        curator,
        [
            TaskCreate(description="Mint an NFT", base_points_reward=30),
            TaskCreate(description="Post a cast", task_type=TaskType.hybrid, base_points_reward=20,
                       metadata={"channel": "base"}),
        ],
        T0,
    )
    assert [t.position for t in tasks] == [0, 1]
    assert tasks[1].task_metadata == {"channel": "base"}


@pytest.mark.asyncio
async def test_set_task_active(db, world, curator):
    await add_task(db, world, curator)

    task = await game_engine.set_task_active(db, world, curator, 0, False, T0)
    assert task.is_active is False
    task = await game_engine.set_task_active(db, world, curator, 0, True, T0)
    assert task.is_active is True


@pytest.mark.asyncio
async def test_set_unknown_task_active(db, world, curator):
    with pytest.raises(TaskNotFound):
        await game_engine.set_task_active(db, world, curator, 3, False, T0)


@pytest.mark.asyncio
async def test_set_task_active_requires_curator(db, world, curator, alice):
    await add_task(db, world, curator)
    with pytest.raises(Unauthorized):
        await game_engine.set_task_active(db, world, alice, 0, False, T0)


@pytest.mark.asyncio
async def test_new_week_starts_with_empty_pool(db, world, curator):
    await add_task(db, world, curator)
    await add_task(db, world, curator)

    task = await add_task(db, world, curator, now=LAUNCH + WEEK + 1)

    assert world.current_week == 1
    assert (task.week, task.position) == (1, 0)
    assert len(await game_engine.get_current_week_tasks(db, world)) == 1
