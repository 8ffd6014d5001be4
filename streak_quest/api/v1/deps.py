"""FastAPI dependencies."""

from typing import Annotated, Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from streak_quest.auth.capabilities import CallerContext, resolve_caller
from streak_quest.config import get_settings
from streak_quest.crud import crud_world_state
from streak_quest.database import get_db
from streak_quest.models.world_state import WorldState


async def get_player_address(
    x_player_address: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    return x_player_address


async def require_caller(
    address: Annotated[Optional[str], Depends(get_player_address)],
) -> CallerContext:
    if address is None:
        raise HTTPException(status_code=401, detail="X-Player-Address header required")
    try:
        return resolve_caller(address)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


async def get_world(db: Annotated[AsyncSession, Depends(get_db)]) -> WorldState:
    """World state for read endpoints. Never advances the week."""
    return await crud_world_state.get_or_create(db, get_settings())
