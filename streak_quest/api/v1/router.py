"""Aggregates all v1 routers."""
from fastapi import APIRouter
from streak_quest.api.v1.game import router as game_router
from streak_quest.api.v1.curator import router as curator_router
from streak_quest.api.v1.attester import router as attester_router
from streak_quest.api.v1.treasury import router as treasury_router

router = APIRouter()
router.include_router(game_router)
router.include_router(curator_router)
router.include_router(attester_router)
router.include_router(treasury_router)
