"""Curator endpoints: manage the current week's task pool."""

from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from streak_quest.api.v1.deps import require_caller
from streak_quest.auth.capabilities import CallerContext
from streak_quest.database import get_db
from streak_quest.schemas.task import TaskBatchCreate, TaskCreate, TaskResponse, TaskUpdate
from streak_quest.services import clock, game_engine
from streak_quest.services.ledger import ledger_transaction

router = APIRouter(prefix="/curator", tags=["curator"])


@router.post("/tasks", response_model=TaskResponse, status_code=201)
async def add_task(
    body: TaskCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[CallerContext, Depends(require_caller)],
):
    now = clock.now()
    async with ledger_transaction(db, now) as world:
        task = await game_engine.add_task(db, world, caller, body, now)
        response = TaskResponse.model_validate(task)
    return response


@router.post("/tasks/batch", response_model=list[TaskResponse], status_code=201)
async def add_tasks(
    body: TaskBatchCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[CallerContext, Depends(require_caller)],
):
    now = clock.now()
    async with ledger_transaction(db, now) as world:
        tasks = await game_engine.add_tasks(db, world, caller, body.tasks, now)
        response = [TaskResponse.model_validate(t) for t in tasks]
    return response


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[CallerContext, Depends(require_caller)],
):
    now = clock.now()
    async with ledger_transaction(db, now) as world:
        task = await game_engine.set_task_active(
            db, world, caller, task_id, body.is_active, now
        )
        response = TaskResponse.model_validate(task)
    return response
