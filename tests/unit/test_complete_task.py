"""Tests for task completion: daily cap, points, streak rules and authority."""

import pytest

from streak_quest.models.game_event import GameEventType
from streak_quest.models.task import TaskType
from streak_quest.services import game_engine
from streak_quest.services.errors import (
    DailyLimitReached,
    NotActive,
    TaskInactive,
    TaskNotFound,
    Unauthorized,
)
from streak_quest.services.ledger import ledger_transaction

from game_helpers import DAY, LAUNCH, T0, WEEK, add_task, join


@pytest.mark.asyncio
async def test_first_completion_awards_points_and_starts_streak(db, world, curator, alice):
    await add_task(db, world, curator, reward=100)
    await join(db, world, alice)

    result = await game_engine.complete_task(db, world, alice, 0, T0 + 10)

    assert result.points_earned == 100
    assert result.new_streak == 1
    assert result.streak_changed is True
    player = result.player
    assert player.total_base_points == 100
    assert player.weekly_base_points == 100
    assert player.tasks_completed_today == 1
    assert player.total_tasks_completed == 1
    assert player.last_check_in_time == T0 + 10


@pytest.mark.asyncio
async def test_daily_cap_of_three(db, world, curator, alice):
    await add_task(db, world, curator, reward=100)
    await join(db, world, alice)

    for i in range(3):
        await game_engine.complete_task(db, world, alice, 0, T0 + i + 1)

    with pytest.raises(DailyLimitReached):
        await game_engine.complete_task(db, world, alice, 0, T0 + 4)

    player = await game_engine.get_player_data(db, alice.address)
    assert player.tasks_completed_today == 3
    assert player.weekly_base_points == 300
    assert player.total_base_points == 300


@pytest.mark.asyncio
async def test_daily_cap_lifts_after_day_window(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)
    for i in range(3):
        await game_engine.complete_task(db, world, alice, 0, T0 + i + 1)

    result = await game_engine.complete_task(db, world, alice, 0, T0 + DAY)

    assert result.player.tasks_completed_today == 1
    assert result.player.last_task_reset_time == T0 + DAY
    assert result.player.weekly_base_points == 400


@pytest.mark.asyncio
async def test_rejected_completion_changes_nothing(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)
    for i in range(3):
        async with ledger_transaction(db, T0 + i + 1) as w:
            await game_engine.complete_task(db, w, alice, 0, T0 + i + 1)

    with pytest.raises(DailyLimitReached):
        async with ledger_transaction(db, T0 + 4) as w:
            await game_engine.complete_task(db, w, alice, 0, T0 + 4)

    player = await game_engine.get_player_data(db, alice.address)
    await db.refresh(player)
    assert player.tasks_completed_today == 3
    assert player.total_tasks_completed == 3
    assert player.last_check_in_time == T0 + 3


@pytest.mark.asyncio
async def test_streak_progression(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)

    # Day 1: first completion starts the streak, the second keeps it.
    r = await game_engine.complete_task(db, world, alice, 0, T0 + 10)
    assert r.new_streak == 1
    r = await game_engine.complete_task(db, world, alice, 0, T0 + 20)
    assert (r.new_streak, r.streak_changed) == (1, False)

    # Next day window, within two day lengths of the last check-in.
    r = await game_engine.complete_task(db, world, alice, 0, T0 + DAY + 100)
    assert (r.new_streak, r.streak_changed) == (2, True)
    r = await game_engine.complete_task(db, world, alice, 0, T0 + DAY + 200)
    assert (r.new_streak, r.streak_changed) == (2, False)

    # Skipping a day resets to 1.
    r = await game_engine.complete_task(db, world, alice, 0, T0 + 4 * DAY)
    assert (r.new_streak, r.streak_changed) == (1, True)
    assert r.player.longest_streak == 2


@pytest.mark.asyncio
async def test_streak_events_only_on_change(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)
    await game_engine.complete_task(db, world, alice, 0, T0 + 10)
    await game_engine.complete_task(db, world, alice, 0, T0 + 20)

    events = await game_engine.get_events(db, player_address=alice.address)
    types = [e.event_type for e in reversed(events)]
    assert types == [
        GameEventType.player_joined,
        GameEventType.task_completed,
        GameEventType.streak_updated,
        GameEventType.task_completed,
    ]


@pytest.mark.asyncio
async def test_not_joined_player_rejected(db, world, curator, alice):
    await add_task(db, world, curator)
    with pytest.raises(NotActive):
        await game_engine.complete_task(db, world, alice, 0, T0)


@pytest.mark.asyncio
async def test_last_week_entrant_rejected_after_rollover(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)

    with pytest.raises(NotActive):
        await game_engine.complete_task(db, world, alice, 0, LAUNCH + WEEK + 10)
    assert world.current_week == 1


@pytest.mark.asyncio
async def test_unknown_task_rejected(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)
    with pytest.raises(TaskNotFound):
        await game_engine.complete_task(db, world, alice, 5, T0 + 1)


@pytest.mark.asyncio
async def test_inactive_task_rejected(db, world, curator, alice):
    await add_task(db, world, curator)
    await game_engine.set_task_active(db, world, curator, 0, False, T0)
    await join(db, world, alice)
    with pytest.raises(TaskInactive):
        await game_engine.complete_task(db, world, alice, 0, T0 + 1)


@pytest.mark.asyncio
async def test_offchain_task_requires_attester(db, world, curator, alice):
    await add_task(db, world, curator, task_type=TaskType.offchain)
    await join(db, world, alice)
    with pytest.raises(Unauthorized):
        await game_engine.complete_task(db, world, alice, 0, T0 + 1)


@pytest.mark.asyncio
async def test_attester_completes_offchain_task_for_player(db, world, curator, attester, alice):
    await add_task(db, world, curator, reward=250, task_type=TaskType.hybrid)
    await join(db, world, alice)

    result = await game_engine.complete_task(
        db, world, attester, 0, T0 + 1, player_address=alice.address
    )

    assert result.player.address == alice.address
    assert result.player.weekly_base_points == 250


@pytest.mark.asyncio
async def test_attester_cannot_complete_onchain_task_for_player(db, world, curator, attester, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)
    with pytest.raises(Unauthorized):
        await game_engine.complete_task(
            db, world, attester, 0, T0 + 1, player_address=alice.address
        )


@pytest.mark.asyncio
async def test_player_cannot_complete_for_someone_else(db, world, curator, alice, bob):
    await add_task(db, world, curator, task_type=TaskType.offchain)
    await join(db, world, alice)
    with pytest.raises(Unauthorized):
        await game_engine.complete_task(db, world, bob, 0, T0 + 1, player_address=alice.address)


@pytest.mark.asyncio
async def test_time_until_day_reset_round_trip(db, world, curator, alice):
    await add_task(db, world, curator)
    await join(db, world, alice)

    await game_engine.complete_task(db, world, alice, 0, T0 + DAY + 5)
    remaining = await game_engine.get_time_until_day_reset(db, world, alice.address, T0 + DAY + 5)
    assert 0 < remaining <= DAY

    assert await game_engine.get_time_until_day_reset(db, world, alice.address, T0 + 2 * DAY + 5) == 0
    assert await game_engine.get_time_until_day_reset(db, world, alice.address, T0 + 3 * DAY) == 0


@pytest.mark.asyncio
async def test_time_until_day_reset_for_unknown_player(db, world, alice):
    assert await game_engine.get_time_until_day_reset(db, world, alice.address, T0) == 0
