# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Game data access.
Encapsulates all read/write operations on the games store.
NO business rules here — pure CRUD plus snapshot persistence.
"""

import threading
from typing import Optional

from pydantic import ValidationError

from gamenight.core.logging import get_logger
from gamenight.models.domain import Game
from gamenight.repositories.snapshot import JSONSnapshot

logger = get_logger(__name__)


class GameRepository:
    """In-memory game storage mirrored to an optional JSON snapshot."""

    def __init__(self, snapshot: Optional[JSONSnapshot] = None) -> None:
        self._store: dict[str, Game] = {}
        self._snapshot = snapshot or JSONSnapshot()
        # Guards store mutation together with the snapshot write
        self._lock = threading.RLock()

    # ── Read ──

    def get_all(self) -> list[Game]:
        return list(self._store.values())

    def get(self, game_id: str) -> Optional[Game]:
        return self._store.get(game_id)

    def exists(self, game_id: str) -> bool:
        return game_id in self._store

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def save(self, game: Game) -> None:
        with self._lock:
            self._store[game.id] = game
            self.flush()

    def save_many(self, games: list[Game]) -> None:
        with self._lock:
            for game in games:
                self._store[game.id] = game
            self.flush()

    def delete(self, game_id: str) -> Optional[Game]:
        with self._lock:
            removed = self._store.pop(game_id, None)
            if removed is not None:
                self.flush()
        return removed

    # ── Persistence ──

    def load(self) -> int:
        """Replace the store with the snapshot contents. Returns games loaded."""
        with self._lock:
            self._store.clear()
            for game_id, raw in self._snapshot.load().items():
                try:
                    self._store[game_id] = Game.model_validate({**raw, "id": game_id})
                except ValidationError as exc:
                    logger.warning("Skipping invalid game record: id=%s, error=%s", game_id, exc)
            return len(self._store)

    def flush(self) -> None:
        """Write the whole store; the copy and the write happen under one lock."""
        with self._lock:
            self._snapshot.save(
                {gid: g.model_dump(mode="json", exclude={"id"}) for gid, g in self._store.items()}
            )

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
