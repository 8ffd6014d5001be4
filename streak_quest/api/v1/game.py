"""Player-facing game endpoints: join, complete, and read-only views."""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from streak_quest.api.v1.deps import get_world, require_caller
from streak_quest.auth.capabilities import CallerContext
from streak_quest.database import get_db
from streak_quest.models.world_state import WorldState
from streak_quest.schemas.game import (
    GameEventResponse,
    GameStateResponse,
    JoinWeekRequest,
    LeaderboardResponse,
)
from streak_quest.schemas.player import (
    DayResetResponse,
    PlayerResponse,
    PlayerStatusResponse,
    PlayerWeekInfoResponse,
)
from streak_quest.schemas.task import TaskResponse
from streak_quest.services import clock, game_engine
from streak_quest.services.ledger import ledger_transaction

router = APIRouter(prefix="/game", tags=["game"])


@router.post("/join", status_code=201)
async def join_week(
    body: JoinWeekRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[CallerContext, Depends(require_caller)],
):
    now = clock.now()
    async with ledger_transaction(db, now) as world:
        result = await game_engine.join_week(db, world, caller, body.paid_amount, now)
    return {
        "player": caller.address,
        "week": result.week,
        "weekly_prize_pool": result.prize_pool,
    }


@router.post("/tasks/{task_id}/complete", status_code=201)
async def complete_task(
    task_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[CallerContext, Depends(require_caller)],
):
    now = clock.now()
    async with ledger_transaction(db, now) as world:
        result = await game_engine.complete_task(db, world, caller, task_id, now)
    return {
        "player": result.player.address,
        "task_id": result.task_id,
        "points_earned": result.points_earned,
        "current_streak": result.new_streak,
        "streak_changed": result.streak_changed,
        "tasks_completed_today": result.player.tasks_completed_today,
        "weekly_base_points": result.player.weekly_base_points,
    }


@router.get("/state", response_model=GameStateResponse)
async def get_state(world: Annotated[WorldState, Depends(get_world)]):
    return GameStateResponse(
        entry_fee=world.entry_fee,
        current_week=world.current_week,
        weekly_prize_pool=world.weekly_prize_pool,
        time_until_week_end=game_engine.get_time_until_week_end(world, clock.now()),
        daily_task_cap=world.daily_task_cap,
    )


@router.get("/tasks", response_model=list[TaskResponse])
async def get_current_week_tasks(
    db: Annotated[AsyncSession, Depends(get_db)],
    world: Annotated[WorldState, Depends(get_world)],
):
    tasks = await game_engine.get_current_week_tasks(db, world)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(db: Annotated[AsyncSession, Depends(get_db)]):
    entries = await game_engine.get_leaderboard(db)
    return LeaderboardResponse(
        addresses=[e.address for e in entries],
        streaks=[e.streak for e in entries],
        points=[e.points for e in entries],
    )


@router.get("/players/{address}", response_model=PlayerResponse)
async def get_player_data(address: str, db: Annotated[AsyncSession, Depends(get_db)]):
    try:
        player = await game_engine.get_player_data(db, address)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return PlayerResponse.model_validate(player)


@router.get("/players/{address}/status", response_model=PlayerStatusResponse)
async def get_player_status(
    address: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    world: Annotated[WorldState, Depends(get_world)],
):
    try:
        status = await game_engine.get_player_status(db, world, address)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return PlayerStatusResponse(**status._asdict())


@router.get("/players/{address}/week-info", response_model=PlayerWeekInfoResponse)
async def get_player_week_info(
    address: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    world: Annotated[WorldState, Depends(get_world)],
):
    try:
        info = await game_engine.get_player_week_info(db, world, address, clock.now())
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return PlayerWeekInfoResponse(**info._asdict())


@router.get("/players/{address}/day-reset", response_model=DayResetResponse)
async def get_time_until_day_reset(
    address: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    world: Annotated[WorldState, Depends(get_world)],
):
    try:
        seconds = await game_engine.get_time_until_day_reset(db, world, address, clock.now())
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return DayResetResponse(address=address.lower(), seconds_until_day_reset=seconds)


@router.get("/events", response_model=list[GameEventResponse])
async def get_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    player: Optional[str] = None,
    week: Optional[int] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    try:
        events = await game_engine.get_events(db, player, week, limit)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return [GameEventResponse.model_validate(e) for e in events]
