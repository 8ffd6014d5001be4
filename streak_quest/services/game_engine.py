"""Weekly streak game: joining, task completion, streaks, week rollover, leaderboard.

Every write entry point takes the explicit ``WorldState`` and the current
timestamp, and starts with ``ensure_current_week``. Preconditions are all
checked before the first mutation; callers run these inside
``ledger_transaction``, which commits any due rollover first, so a raised
``GameError`` rolls back only the call itself.
"""

import logging
from typing import NamedTuple, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.auth.capabilities import (
    CallerContext,
    Capability,
    normalize_address,
    require_capability,
)
from streak_quest.crud import crud_game_event, crud_player, crud_task, crud_week_closure
from streak_quest.models.game_event import GameEvent, GameEventType
from streak_quest.models.player import Player
from streak_quest.models.task import QuestTask, TaskType
from streak_quest.models.week_closure import WeekClosure
from streak_quest.models.world_state import WorldState
from streak_quest.schemas.task import TaskCreate
from streak_quest.services import clock, treasury_service
from streak_quest.services.errors import (
    AlreadyJoined,
    DailyLimitReached,
    InsufficientFee,
    NotActive,
    NotFound,
    SettlementError,
    TaskInactive,
    TaskNotFound,
    Unauthorized,
)
from streak_quest.services.ranking import LeaderboardEntry, rank_players

logger = logging.getLogger(__name__)


class JoinResult(NamedTuple):
    player: Player
    week: int
    prize_pool: int


class CompletionResult(NamedTuple):
    player: Player
    task_id: int
    points_earned: int
    new_streak: int
    streak_changed: bool


class PlayerStatus(NamedTuple):
    address: str
    has_joined_current_week: bool
    is_active_this_week: bool
    player_week: int
    current_week: int


class PlayerWeekInfo(NamedTuple):
    address: str
    player_week: int
    current_week: int
    time_until_week_end: int
    time_until_day_reset: int


# ---------------------------------------------------------------------------
# Week rollover
# ---------------------------------------------------------------------------


async def ensure_current_week(
    db: AsyncSession,
    world: WorldState,
    now: int,
    settlement: Optional[treasury_service.SettlementHandler] = None,
) -> Optional[WeekClosure]:
    """Advance ``world`` to the week containing ``now`` if it has fallen behind.

    The closing week's pool and ranked entrants are snapshotted, stale active
    flags are cleared in the same step, the pool is zeroed and the treasury is
    asked to settle once. Weeks nobody touched are skipped in one jump.
    Returns the new closure, or None when no boundary was crossed.
    """
    target_week = clock.week_index_of(world.rules, now)
    if target_week <= world.current_week:
        return None

    closing_week = world.current_week
    pool = world.weekly_prize_pool
    ranked = rank_players(await crud_player.get_ranked_candidates(db, week=closing_week))

    closure = await crud_week_closure.create(
        db,
        obj_in={
            "week": closing_week,
            "prize_pool": pool,
            "closed_at": now,
            "entrants": [entry.as_dict() for entry in ranked],
        },
    )
    await crud_game_event.record(
        db,
        GameEventType.week_closed,
        week=closing_week,
        occurred_at=now,
        payload={"prize_pool": str(pool), "entrants": len(ranked)},
    )

    await db.execute(
        update(Player)
        .where(Player.active_this_week == True, Player.player_week < target_week)  # noqa: E712
        .values(active_this_week=False)
    )
    world.weekly_prize_pool = 0
    world.current_week = target_week
    await db.flush()
    logger.info(
        "Week %d closed (pool=%d wei, %d ranked); current week is now %d",
        closing_week,
        pool,
        len(ranked),
        target_week,
    )

    settler = settlement or treasury_service.get_treasury()
    try:
        await settler.settle(db, closing_week, ranked, pool)
    except SettlementError:
        # Closure is flagged failed by the treasury; the rollover itself stands.
        logger.warning("Week %d left unsettled", closing_week)
    return closure


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


async def join_week(
    db: AsyncSession,
    world: WorldState,
    caller: CallerContext,
    paid_amount: int,
    now: int,
) -> JoinResult:
    """Pay the entry fee and become active for the current week."""
    require_capability(caller, Capability.player)
    await ensure_current_week(db, world, now)

    if paid_amount < world.entry_fee:
        raise InsufficientFee(
            f"Entry fee is {world.entry_fee} wei, received {paid_amount}"
        )
    existing = await crud_player.get_by_address(db, caller.address)
    if existing.player_week == world.current_week and existing.active_this_week:
        logger.warning("Player %s tried to join week %d twice", caller.address, world.current_week)
        raise AlreadyJoined(f"Already joined week {world.current_week}")

    week = world.current_week

    def _join(player: Player) -> None:
        player.active_this_week = True
        player.player_week = week
        player.weekly_base_points = 0
        player.tasks_completed_today = 0
        player.last_task_reset_time = now

    player = await crud_player.upsert(db, caller.address, _join)
    world.weekly_prize_pool = world.weekly_prize_pool + paid_amount
    await crud_game_event.record(
        db,
        GameEventType.player_joined,
        week=week,
        occurred_at=now,
        player_address=caller.address,
        payload={"paid_amount": str(paid_amount)},
    )
    logger.info("Player %s joined week %d (paid %d wei)", caller.address, week, paid_amount)
    return JoinResult(player=player, week=week, prize_pool=world.weekly_prize_pool)


def _next_streak(rules: clock.GameRules, player: Player, window_start: int, now: int) -> int:
    """Streak after a completion at ``now``. Only the first completion in a day window counts."""
    last = player.last_check_in_time
    if last <= 0 or player.current_streak == 0:
        return 1
    if last >= window_start:
        return player.current_streak
    if clock.is_consecutive_day(rules, last, now):
        return player.current_streak + 1
    return 1


async def complete_task(
    db: AsyncSession,
    world: WorldState,
    caller: CallerContext,
    task_id: int,
    now: int,
    player_address: Optional[str] = None,
) -> CompletionResult:
    """Mark a current-week task complete for a player.

    ``onchain`` tasks are completed by the player's own call. ``offchain`` and
    ``hybrid`` tasks are confirmed by an attester on the player's behalf.
    """
    require_capability(caller, Capability.player)
    await ensure_current_week(db, world, now)

    address = normalize_address(player_address) if player_address else caller.address
    on_behalf = address != caller.address
    if on_behalf:
        require_capability(caller, Capability.attester)

    player = await crud_player.get_by_address(db, address)
    if not (player.active_this_week and player.player_week == world.current_week):
        raise NotActive(f"{address} has not joined week {world.current_week}")

    try:
        task = await crud_task.get_task(db, world.current_week, task_id)
    except NotFound as exc:
        raise TaskNotFound(str(exc)) from exc

    _check_completion_authority(caller, task, on_behalf)
    if not task.is_active:
        raise TaskInactive(f"Task {task_id} is not active")

    rules = world.rules
    window_reset = clock.day_boundary_crossed(rules, player.last_task_reset_time, now)
    window_start = now if window_reset else player.last_task_reset_time
    completed_today = 0 if window_reset else player.tasks_completed_today
    if completed_today >= rules.daily_task_cap:
        raise DailyLimitReached(
            f"{address} already completed {completed_today} tasks in this day window"
        )

    new_streak = _next_streak(rules, player, window_start, now)
    streak_changed = new_streak != player.current_streak
    reward = task.base_points_reward

    # All checks passed; apply.
    player.last_task_reset_time = window_start
    player.tasks_completed_today = completed_today + 1
    player.current_streak = new_streak
    player.longest_streak = max(player.longest_streak, new_streak)
    player.total_base_points += reward
    player.weekly_base_points += reward
    player.total_tasks_completed += 1
    player.last_check_in_time = now
    await db.flush()

    await crud_game_event.record(
        db,
        GameEventType.task_completed,
        week=world.current_week,
        occurred_at=now,
        player_address=address,
        payload={"task_id": task_id, "points_earned": reward},
    )
    if streak_changed:
        await crud_game_event.record(
            db,
            GameEventType.streak_updated,
            week=world.current_week,
            occurred_at=now,
            player_address=address,
            payload={"new_streak": new_streak},
        )
    logger.info(
        "Player %s completed task %d (+%d BP, streak %d, %d/%d today)%s",
        address,
        task_id,
        reward,
        new_streak,
        player.tasks_completed_today,
        rules.daily_task_cap,
        f" attested by {caller.address}" if on_behalf else "",
    )
    return CompletionResult(
        player=player,
        task_id=task_id,
        points_earned=reward,
        new_streak=new_streak,
        streak_changed=streak_changed,
    )


def _check_completion_authority(caller: CallerContext, task: QuestTask, on_behalf: bool) -> None:
    if task.task_type == TaskType.onchain:
        if on_behalf:
            raise Unauthorized("On-chain tasks must be completed by the player")
        return
    if not caller.has(Capability.attester):
        raise Unauthorized(f"{task.task_type.value} tasks must be confirmed by an attester")


async def add_task(
    db: AsyncSession,
    world: WorldState,
    caller: CallerContext,
    obj_in: TaskCreate,
    now: int,
) -> QuestTask:
    """Append a task to the current week's pool. Curator only."""
    require_capability(caller, Capability.curator)
    await ensure_current_week(db, world, now)
    task = await crud_task.add_task(db, world.current_week, obj_in)
    logger.info(
        "Curator %s added task %d to week %d: %s",
        caller.address,
        task.position,
        task.week,
        task.description,
    )
    return task


async def add_tasks(
    db: AsyncSession,
    world: WorldState,
    caller: CallerContext,
    tasks_in: Sequence[TaskCreate],
    now: int,
) -> list[QuestTask]:
    require_capability(caller, Capability.curator)
    return [await add_task(db, world, caller, obj_in, now) for obj_in in tasks_in]


async def set_task_active(
    db: AsyncSession,
    world: WorldState,
    caller: CallerContext,
    task_id: int,
    is_active: bool,
    now: int,
) -> QuestTask:
    require_capability(caller, Capability.curator)
    await ensure_current_week(db, world, now)
    try:
        task = await crud_task.set_active(db, world.current_week, task_id, is_active)
    except NotFound as exc:
        raise TaskNotFound(str(exc)) from exc
    logger.info(
        "Curator %s set task %d active=%s in week %d",
        caller.address,
        task_id,
        is_active,
        world.current_week,
    )
    return task


# ---------------------------------------------------------------------------
# Reads (no rollover; may observe a week that has logically ended)
# ---------------------------------------------------------------------------


async def get_player_data(db: AsyncSession, address: str) -> Player:
    return await crud_player.get_by_address(db, normalize_address(address))


async def get_player_status(db: AsyncSession, world: WorldState, address: str) -> PlayerStatus:
    player = await get_player_data(db, address)
    return PlayerStatus(
        address=player.address,
        has_joined_current_week=player.player_week == world.current_week
        and player.last_task_reset_time > 0,
        is_active_this_week=player.active_this_week,
        player_week=player.player_week,
        current_week=world.current_week,
    )


async def get_player_week_info(
    db: AsyncSession, world: WorldState, address: str, now: int
) -> PlayerWeekInfo:
    """The player's joined week next to the live week and both reset countdowns."""
    player = await get_player_data(db, address)
    rules = world.rules
    return PlayerWeekInfo(
        address=player.address,
        player_week=player.player_week,
        current_week=world.current_week,
        time_until_week_end=clock.time_until_week_end(rules, now),
        time_until_day_reset=clock.time_until_day_reset(rules, player.last_task_reset_time, now),
    )


async def get_current_week_tasks(db: AsyncSession, world: WorldState) -> Sequence[QuestTask]:
    return await crud_task.get_tasks(db, world.current_week)


async def get_leaderboard(db: AsyncSession) -> list[LeaderboardEntry]:
    return rank_players(await crud_player.get_ranked_candidates(db))


def get_time_until_week_end(world: WorldState, now: int) -> int:
    return clock.time_until_week_end(world.rules, now)


async def get_time_until_day_reset(
    db: AsyncSession, world: WorldState, address: str, now: int
) -> int:
    player = await get_player_data(db, address)
    return clock.time_until_day_reset(world.rules, player.last_task_reset_time, now)


async def get_events(
    db: AsyncSession,
    player_address: Optional[str] = None,
    week: Optional[int] = None,
    limit: int = 100,
) -> Sequence[GameEvent]:
    if player_address:
        player_address = normalize_address(player_address)
    return await crud_game_event.list_events(db, player_address, week, limit)
