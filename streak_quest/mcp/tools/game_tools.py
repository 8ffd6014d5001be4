"""Game MCP tools: join, complete, and read views (role: player)."""

from typing import Optional

from streak_quest.auth.capabilities import CallerContext, resolve_caller
from streak_quest.config import get_settings
from streak_quest.crud import crud_world_state
from streak_quest.database import AsyncSessionLocal
from streak_quest.mcp.server import mcp
from streak_quest.models.player import Player
from streak_quest.models.task import QuestTask
from streak_quest.services import clock, game_engine
from streak_quest.services.ledger import ledger_transaction


def _caller(x_player_address: Optional[str]) -> CallerContext:
    """Resolve the tool caller; write tools refuse anonymous calls."""
    if not x_player_address:
        raise ValueError("x_player_address is required")
    return resolve_caller(x_player_address)


def _player_dict(player: Player) -> dict:
    return {
        "address": player.address,
        "current_streak": player.current_streak,
        "longest_streak": player.longest_streak,
        "total_base_points": player.total_base_points,
        "weekly_base_points": player.weekly_base_points,
        "active_this_week": player.active_this_week,
        "player_week": player.player_week,
        "tasks_completed_today": player.tasks_completed_today,
        "last_check_in_time": player.last_check_in_time,
        "last_task_reset_time": player.last_task_reset_time,
    }


def _task_dict(task: QuestTask) -> dict:
    return {
        "id": task.position,
        "description": task.description,
        "task_type": task.task_type.value,
        "base_points_reward": task.base_points_reward,
        "is_active": task.is_active,
    }


@mcp.tool()
async def get_game_state() -> dict:
    """Entry fee (wei), current week, prize pool (wei) and seconds until the week ends."""
    async with AsyncSessionLocal() as db:
        world = await crud_world_state.get_or_create(db, get_settings())
        return {
            "entry_fee": world.entry_fee,
            "current_week": world.current_week,
            "weekly_prize_pool": world.weekly_prize_pool,
            "time_until_week_end": game_engine.get_time_until_week_end(world, clock.now()),
        }


@mcp.tool()
async def get_player_data(address: str) -> dict:
    """Streak, points and daily progress for a player address."""
    async with AsyncSessionLocal() as db:
        return _player_dict(await game_engine.get_player_data(db, address))


@mcp.tool()
async def list_current_week_tasks() -> list[dict]:
    """All tasks in the current week's pool, in task id order."""
    async with AsyncSessionLocal() as db:
        world = await crud_world_state.get_or_create(db, get_settings())
        return [_task_dict(t) for t in await game_engine.get_current_week_tasks(db, world)]


@mcp.tool()
async def get_leaderboard(limit: int = 50) -> list[dict]:
    """Ranked players by streak + weekly points."""
    async with AsyncSessionLocal() as db:
        entries = await game_engine.get_leaderboard(db)
        return [
            {"rank": i, **entry.as_dict(), "score": entry.score}
            for i, entry in enumerate(entries[:limit], start=1)
        ]


@mcp.tool()
async def join_week(paid_amount: int, x_player_address: Optional[str] = None) -> dict:
    """Join the current week by paying at least the entry fee (wei)."""
    caller = _caller(x_player_address)
    async with AsyncSessionLocal() as db:
        now = clock.now()
        async with ledger_transaction(db, now) as world:
            result = await game_engine.join_week(db, world, caller, paid_amount, now)
        return {"week": result.week, "weekly_prize_pool": result.prize_pool}


@mcp.tool()
async def complete_task(task_id: int, x_player_address: Optional[str] = None) -> dict:
    """Complete an on-chain task in the current week (max 3 per day window)."""
    caller = _caller(x_player_address)
    async with AsyncSessionLocal() as db:
        now = clock.now()
        async with ledger_transaction(db, now) as world:
            result = await game_engine.complete_task(db, world, caller, task_id, now)
        return {
            "task_id": result.task_id,
            "points_earned": result.points_earned,
            "current_streak": result.new_streak,
            "tasks_completed_today": result.player.tasks_completed_today,
        }
