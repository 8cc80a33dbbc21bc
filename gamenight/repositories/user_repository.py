# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: User data access, keyed by username.
"""

import threading
from typing import Optional

from pydantic import ValidationError

from gamenight.core.logging import get_logger
from gamenight.models.domain import User
from gamenight.repositories.snapshot import JSONSnapshot

logger = get_logger(__name__)


class UserRepository:
    """In-memory user storage mirrored to an optional JSON snapshot."""

    def __init__(self, snapshot: Optional[JSONSnapshot] = None) -> None:
        self._store: dict[str, User] = {}
        self._snapshot = snapshot or JSONSnapshot()
        # Guards store mutation together with the snapshot write
        self._lock = threading.RLock()

    # ── Read ──

    def get_all(self) -> list[User]:
        return list(self._store.values())

    def get(self, username: str) -> Optional[User]:
        return self._store.get(username)

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        return next((u for u in self._store.values() if u.email.lower() == wanted), None)

    def exists(self, username: str) -> bool:
        return username in self._store

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def save(self, user: User) -> None:
        with self._lock:
            self._store[user.username] = user
            self.flush()

    def save_many(self, users: list[User]) -> None:
        with self._lock:
            for user in users:
                self._store[user.username] = user
            self.flush()

    def delete(self, username: str) -> Optional[User]:
        with self._lock:
            removed = self._store.pop(username, None)
            if removed is not None:
                self.flush()
        return removed

    # ── Persistence ──

    def load(self) -> int:
        with self._lock:
            self._store.clear()
            for username, raw in self._snapshot.load().items():
                try:
                    self._store[username] = User.model_validate({**raw, "username": username})
                except ValidationError as exc:
                    logger.warning("Skipping invalid user record: username=%s, error=%s", username, exc)
            return len(self._store)

    def flush(self) -> None:
        """Write the whole store; the copy and the write happen under one lock."""
        with self._lock:
            self._snapshot.save(
                {name: u.model_dump(mode="json", exclude={"username"}) for name, u in self._store.items()}
            )

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
