# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Game Night Scheduler
====================
Players submit the weekdays they can make; the GM sees which days work for
everyone, how close every other day comes, and why nothing fits when no day
does. Scheduling a day announces it on the game's webhook.

Port: 3000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamenight.controllers import game_controller, system_controller, user_controller
from gamenight.core.config import settings
from gamenight.core.dependencies import get_event_bus, get_game_repo, get_user_repo
from gamenight.core.logging import get_logger
from gamenight.metrics.prometheus import ACTIVE_GAMES, REGISTERED_USERS
from gamenight.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Load snapshots on startup; deliver anything still queued on shutdown."""
    games = get_game_repo().load()
    users = get_user_repo().load()
    ACTIVE_GAMES.set(games)
    REGISTERED_USERS.set(users)
    logger.info(
        "Scheduler starting: games=%d, users=%d, persistent=%s",
        games, users, bool(settings.DATA_DIR),
    )
    yield
    flushed = get_event_bus().drain()
    logger.info("Scheduler shutting down: flushed_notifications=%d", flushed)


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Game Night Scheduler",
    description="Weekday availability voting and session scheduling for tabletop groups.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(system_controller.router)
app.include_router(user_controller.router)
app.include_router(game_controller.router)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
