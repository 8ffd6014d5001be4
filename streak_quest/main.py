"""FastAPI application entry point with FastMCP mounted."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from streak_quest.auth.hmac_auth import verify_request_signature
from streak_quest.config import get_settings
from streak_quest.services.errors import GameError

logger = logging.getLogger(__name__)
settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
)


class HmacMiddleware(BaseHTTPMiddleware):
    """Verify HMAC-signed requests when HMAC_SECRET is configured.

    Only requests that carry the X-Player-Address header are checked.
    Requests without that header pass through (dependencies still guard access).
    When HMAC_SECRET is empty the middleware is a no-op (dev/test mode).
    """

    async def dispatch(self, request, call_next):
        if not settings.HMAC_SECRET:
            return await call_next(request)

        address_header = request.headers.get("x-player-address")
        if address_header is None:
            return await call_next(request)

        ok = verify_request_signature(
            settings.HMAC_SECRET,
            address_header,
            request.headers.get("x-request-timestamp"),
            request.headers.get("x-nonce"),
            request.headers.get("x-signature"),
        )
        if not ok:
            return JSONResponse({"detail": "Invalid request signature"}, status_code=401)
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from streak_quest.crud import crud_world_state
    from streak_quest.database import AsyncSessionLocal

    logger.info("Starting Streak Quest...")
    async with AsyncSessionLocal() as db:
        world = await crud_world_state.get_or_create(db, settings)
        await db.commit()
        logger.info(
            "World state: week %d, pool %d wei, entry fee %d wei",
            world.current_week,
            world.weekly_prize_pool,
            world.entry_fee,
        )
    async with mcp_app.lifespan(app):
        yield
    logger.info("Streak Quest stopped")


# FastMCP ASGI sub-app
from streak_quest.mcp.server import mcp  # noqa: E402

mcp_app = mcp.http_app(path="/mcp")

app = FastAPI(
    title="Streak Quest",
    description="Weekly streak game: entry fees, daily tasks, streaks and a prize leaderboard",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Must be added after CORS
app.add_middleware(HmacMiddleware)


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    logger.warning("%s %s rejected: %s (%s)", request.method, request.url.path, exc, exc.code)
    return JSONResponse({"detail": str(exc), "code": exc.code}, status_code=exc.status_code)


# REST API router
from streak_quest.api.v1.router import router as api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")

app.mount("/mcp", mcp_app)


@app.get("/health")
async def health():
    """Basic liveness probe."""
    return {"status": "ok", "service": "streak-quest"}


@app.get("/health/ready")
async def health_ready():
    """Readiness probe with database check."""
    from streak_quest.database import engine
    from sqlalchemy import text

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "ready", "database": "ok"}
    except Exception as e:
        logger.error("Health ready check failed: %s", e)
        return JSONResponse(
            {"status": "not_ready", "database": "error"},
            status_code=503
        )
