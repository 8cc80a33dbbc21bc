# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Game management — votes, availability reports, scheduling.
Coordinates repository writes with metrics, history, and domain events.

Raises KeyError for unknown games/users, PermissionError when the actor does
not own the game, InvalidDay for day labels outside Monday..Sunday. Every
check happens before the first mutation.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from gamenight.core.logging import get_logger
from gamenight.metrics.prometheus import (
    ACTIVE_GAMES,
    GAMES_CREATED,
    SESSIONS_SCHEDULED,
    VOTES_SUBMITTED,
)
from gamenight.models.domain import (
    Effect,
    Game,
    User,
    Weekday,
    canonical_days,
    parse_weekday,
)
from gamenight.repositories.game_repository import GameRepository
from gamenight.repositories.history_repository import HistoryRepository
from gamenight.repositories.user_repository import UserRepository
from gamenight.services.availability import common_days, score_day, score_days
from gamenight.services.divergence import explain_divergence
from gamenight.services.events import DayScheduled, EventBus

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def summarize_availability(game: Game) -> dict[str, Any]:
    """Everything the GM view needs, as plain data."""
    votes = game.votes
    common = common_days(votes)
    return {
        "game_id": game.id,
        "name": game.name,
        "total_voters": len(votes),
        "votes": {player: list(days) for player, days in sorted(votes.items())},
        "common_days": common,
        "day_scores": score_days(votes),
        "explanation": None if common else explain_divergence(votes),
        "scheduled_day": game.scheduled_day,
        "scheduled_score": (
            score_day(votes, game.scheduled_day) if game.scheduled_day else None
        ),
    }


class GameService:
    """Business logic for games and their availability."""

    def __init__(
        self,
        game_repo: GameRepository,
        user_repo: UserRepository,
        history_repo: HistoryRepository,
        event_bus: EventBus,
    ) -> None:
        self._games = game_repo
        self._users = user_repo
        self._history = history_repo
        self._events = event_bus

    # ── Guards ──

    def _require_game(self, game_id: str) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise KeyError(f"No game found with id '{game_id}'")
        return game

    @staticmethod
    def _require_owner(game: Game, actor: str) -> None:
        if game.owner != actor:
            raise PermissionError(f"'{actor}' does not own game '{game.id}'")

    # ── Commands ──

    def create_game(
        self,
        owner: str,
        name: str,
        effect: Effect = Effect.NONE,
        webhook_url: Optional[str] = None,
    ) -> Game:
        user = self._users.get(owner)
        if user is None:
            raise KeyError(f"No user named '{owner}'")

        game = Game(
            id=str(uuid.uuid4()),
            name=name,
            owner=owner,
            effect=effect,
            webhook_url=webhook_url or None,
            created_at=_now(),
        )
        self._games.save(game)
        user.games.append(game.id)
        self._users.save(user)

        GAMES_CREATED.inc()
        ACTIVE_GAMES.set(self._games.count())
        self._history.record_event("game_created", game.id, owner, {"name": name})
        logger.info("Game created: id=%s, owner=%s", game.id, owner, extra={"game_id": game.id})
        return game

    def submit_vote(
        self, game_id: str, player: str, days: Iterable[str | Weekday]
    ) -> Game:
        """Replace the player's availability wholesale."""
        game = self._require_game(game_id)
        selected = canonical_days(days)

        game.votes[player] = selected
        game.updated_at = _now()
        self._games.save(game)

        VOTES_SUBMITTED.inc()
        self._history.record_event(
            "vote_submitted", game.id, player, {"days": [d.value for d in selected]}
        )
        logger.info(
            "Vote submitted: game=%s, player=%s, days=%d",
            game.id,
            player,
            len(selected),
            extra={"game_id": game.id},
        )
        return game

    def schedule(
        self,
        game_id: str,
        actor: str,
        day: Optional[str | Weekday],
        annotation: str = "",
    ) -> Game:
        """
        Commit (or clear, when ``day`` is empty) the session day.
        The GM may pick any day; the intersection is not consulted.
        """
        game = self._require_game(game_id)
        selected = parse_weekday(day) if day else None
        self._require_owner(game, actor)

        game.scheduled_day = selected
        game.updated_at = _now()
        self._games.save(game)

        SESSIONS_SCHEDULED.labels(action="scheduled" if selected else "cleared").inc()
        self._history.record_event(
            "day_scheduled",
            game.id,
            actor,
            {"day": selected.value if selected else None},
        )
        logger.info(
            "Session %s: game=%s, day=%s",
            "scheduled" if selected else "cleared",
            game.id,
            selected.value if selected else None,
            extra={"game_id": game.id},
        )

        if selected and game.webhook_url:
            self._events.publish(
                DayScheduled(
                    game_id=game.id,
                    game_name=game.name,
                    day=selected,
                    players=list(game.players),
                    target=game.webhook_url,
                    annotation=annotation or "",
                    scheduled_by=actor,
                    occurred_at=_now(),
                )
            )
        return game

    def update_webhook(self, game_id: str, actor: str, webhook_url: Optional[str]) -> Game:
        game = self._require_game(game_id)
        self._require_owner(game, actor)

        game.webhook_url = webhook_url or None
        game.updated_at = _now()
        self._games.save(game)
        self._history.record_event(
            "webhook_updated", game.id, actor, {"configured": game.webhook_url is not None}
        )
        return game

    def assign_player(self, game_id: str, actor: str, username: str) -> Game:
        game = self._require_game(game_id)
        self._require_owner(game, actor)
        user = self._users.get(username)
        if user is None:
            raise KeyError(f"No user named '{username}'")

        if username not in game.players:
            game.players.append(username)
            game.updated_at = _now()
            self._games.save(game)
            if game.id not in user.games:
                user.games.append(game.id)
                self._users.save(user)
            self._history.record_event("player_assigned", game.id, actor, {"player": username})
            logger.info(
                "Player assigned: game=%s, player=%s",
                game.id,
                username,
                extra={"game_id": game.id},
            )
        return game

    def reset_votes(self, game_id: str, actor: str) -> Game:
        """Clear every vote; the scheduled day is kept."""
        game = self._require_game(game_id)
        self._require_owner(game, actor)

        cleared = len(game.votes)
        game.votes = {}
        game.updated_at = _now()
        self._games.save(game)
        self._history.record_event("votes_reset", game.id, actor, {"cleared": cleared})
        logger.info("Votes reset: game=%s, cleared=%d", game.id, cleared, extra={"game_id": game.id})
        return game

    def delete_game(self, game_id: str, actor: str) -> dict[str, str]:
        game = self._require_game(game_id)
        self._require_owner(game, actor)

        self._games.delete(game.id)
        touched: list[User] = []
        for user in self._users.get_all():
            if game.id in user.games:
                user.games = [gid for gid in user.games if gid != game.id]
                touched.append(user)
        if touched:
            self._users.save_many(touched)

        ACTIVE_GAMES.set(self._games.count())
        self._history.record_event("game_deleted", game.id, actor, {"name": game.name})
        logger.info("Game deleted: id=%s", game.id, extra={"game_id": game.id})
        return {"status": "deleted", "game_id": game.id}

    # ── Queries ──

    def get_game(self, game_id: str, actor: User) -> Game:
        """Player view. GMs, the owner and assigned players may look."""
        game = self._require_game(game_id)
        if not (actor.is_gm or game.owner == actor.username or game.id in actor.games):
            raise PermissionError(f"'{actor.username}' has no access to game '{game.id}'")
        return game

    def list_games_for(self, user: User) -> list[Game]:
        """Dashboard: games the user owns or is assigned to."""
        return [g for g in (self._games.get(gid) for gid in user.games) if g is not None]

    def availability_report(self, game_id: str, actor: str) -> dict[str, Any]:
        game = self._require_game(game_id)
        self._require_owner(game, actor)
        return summarize_availability(game)

    def history(
        self, game_id: str, actor: str, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        game = self._require_game(game_id)
        self._require_owner(game, actor)
        return self._history.get_all(subject=game.id, limit=limit)
