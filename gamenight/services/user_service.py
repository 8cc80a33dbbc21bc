# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: User registration and removal.
"""

import hmac
from datetime import datetime, timezone

from gamenight.core.config import settings
from gamenight.core.logging import get_logger
from gamenight.metrics.prometheus import REGISTERED_USERS
from gamenight.models.domain import Game, User
from gamenight.repositories.game_repository import GameRepository
from gamenight.repositories.history_repository import HistoryRepository
from gamenight.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class UserService:
    """Business logic for the user roster."""

    def __init__(
        self,
        user_repo: UserRepository,
        game_repo: GameRepository,
        history_repo: HistoryRepository,
    ) -> None:
        self._users = user_repo
        self._games = game_repo
        self._history = history_repo

    def register(self, username: str, email: str, gm_secret: str = "") -> User:
        """Create a user. Raises ValueError if the username or email is taken."""
        if self._users.exists(username):
            raise ValueError("Username already exists")
        if self._users.get_by_email(email) is not None:
            raise ValueError("Email already in use")

        is_gm = bool(settings.GM_SECRET) and hmac.compare_digest(
            gm_secret.encode(), settings.GM_SECRET.encode()
        )
        user = User(
            username=username,
            email=email,
            is_gm=is_gm,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._users.save(user)

        REGISTERED_USERS.set(self._users.count())
        self._history.record_event("user_registered", username, username, {"is_gm": is_gm})
        logger.info("User registered: username=%s, gm=%s", username, is_gm)
        return user

    def get_user(self, username: str) -> User:
        user = self._users.get(username)
        if user is None:
            raise KeyError(f"No user named '{username}'")
        return user

    def list_users(self) -> list[User]:
        return sorted(self._users.get_all(), key=lambda u: u.username)

    def delete_user(self, username: str, actor: str) -> dict[str, str]:
        """Remove a user and every roster entry and vote they held."""
        if not self._users.exists(username):
            raise KeyError(f"No user named '{username}'")

        touched: list[Game] = []
        for game in self._games.get_all():
            if username in game.players or username in game.votes:
                game.players = [p for p in game.players if p != username]
                game.votes.pop(username, None)
                touched.append(game)
        if touched:
            self._games.save_many(touched)
        self._users.delete(username)

        REGISTERED_USERS.set(self._users.count())
        self._history.record_event(
            "user_deleted", username, actor, {"games_touched": len(touched)}
        )
        logger.info("User deleted: username=%s, games_touched=%d", username, len(touched))
        return {"status": "deleted", "username": username}
