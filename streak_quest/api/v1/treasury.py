"""Treasury read endpoints: week closures and payouts."""

from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from streak_quest.crud import crud_week_closure
from streak_quest.database import get_db
from streak_quest.schemas.treasury import WeekClosureResponse

router = APIRouter(prefix="/treasury", tags=["treasury"])


@router.get("/closures/{week}", response_model=WeekClosureResponse)
async def get_week_closure(week: int, db: Annotated[AsyncSession, Depends(get_db)]):
    closure = await crud_week_closure.get_by_week(db, week)
    if not closure:
        raise HTTPException(404, "Week has not been closed")
    return WeekClosureResponse.model_validate(closure)
