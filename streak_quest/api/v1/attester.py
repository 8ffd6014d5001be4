"""Attester endpoint: confirm off-chain task completion on a player's behalf."""

from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from streak_quest.api.v1.deps import require_caller
from streak_quest.auth.capabilities import CallerContext
from streak_quest.database import get_db
from streak_quest.schemas.game import AttesterCompleteRequest
from streak_quest.services import clock, game_engine
from streak_quest.services.ledger import ledger_transaction

router = APIRouter(prefix="/attester", tags=["attester"])


@router.post("/complete", status_code=201)
async def attest_completion(
    body: AttesterCompleteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[CallerContext, Depends(require_caller)],
):
    now = clock.now()
    async with ledger_transaction(db, now) as world:
        result = await game_engine.complete_task(
            db, world, caller, body.task_id, now, player_address=body.player_address
        )
    return {
        "player": result.player.address,
        "task_id": result.task_id,
        "points_earned": result.points_earned,
        "current_streak": result.new_streak,
        "attested_by": caller.address,
    }
