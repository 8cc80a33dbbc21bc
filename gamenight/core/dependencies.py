# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories, services, and identity.
"""

from pathlib import Path
from typing import Optional

from fastapi import Depends, Header, HTTPException

from gamenight.core.config import settings
from gamenight.models.domain import User
from gamenight.repositories.game_repository import GameRepository
from gamenight.repositories.history_repository import HistoryRepository
from gamenight.repositories.snapshot import JSONSnapshot
from gamenight.repositories.user_repository import UserRepository
from gamenight.services.events import EventBus
from gamenight.services.game_service import GameService
from gamenight.services.notification_client import WebhookNotifier
from gamenight.services.user_service import UserService


def _snapshot(filename: str) -> JSONSnapshot:
    if not settings.DATA_DIR:
        return JSONSnapshot()
    return JSONSnapshot(Path(settings.DATA_DIR) / filename)


# ── Singleton repository instances ──
_game_repo = GameRepository(_snapshot("games.json"))
_user_repo = UserRepository(_snapshot("users.json"))
_history_repo = HistoryRepository()

# ── Events: the notifier subscribes to scheduling facts ──
_event_bus = EventBus()
_notifier = WebhookNotifier()
_event_bus.subscribe(_notifier.handle)

# ── Service instances (with injected dependencies) ──
_game_service = GameService(
    game_repo=_game_repo,
    user_repo=_user_repo,
    history_repo=_history_repo,
    event_bus=_event_bus,
)
_user_service = UserService(
    user_repo=_user_repo,
    game_repo=_game_repo,
    history_repo=_history_repo,
)


# ── FastAPI dependency functions ──
def get_game_service() -> GameService:
    return _game_service


def get_user_service() -> UserService:
    return _user_service


def get_game_repo() -> GameRepository:
    return _game_repo


def get_user_repo() -> UserRepository:
    return _user_repo


def get_history_repo() -> HistoryRepository:
    return _history_repo


def get_event_bus() -> EventBus:
    return _event_bus


def get_notifier() -> WebhookNotifier:
    return _notifier


# ── Identity (supplied by the upstream auth layer as X-User) ──
def get_current_user(
    x_user: Optional[str] = Header(default=None, alias="X-User"),
    users: UserRepository = Depends(get_user_repo),
) -> User:
    if not x_user:
        raise HTTPException(status_code=401, detail="Missing X-User header")
    user = users.get(x_user)
    if user is None:
        raise HTTPException(status_code=401, detail=f"Unknown user '{x_user}'")
    return user


def require_gm(user: User = Depends(get_current_user)) -> User:
    if not user.is_gm:
        raise HTTPException(status_code=403, detail="GM role required")
    return user
