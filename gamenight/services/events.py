# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: In-process domain events.

The scheduler publishes facts; subscribers (the webhook notifier) receive
them when the bus is drained, which the HTTP layer does in a background task
after the response is produced. A failing subscriber is logged and never
reaches the publisher.
"""

from collections import deque
from typing import Callable

from pydantic import BaseModel, Field

from gamenight.core.logging import get_logger
from gamenight.models.domain import Weekday

logger = get_logger(__name__)


class DayScheduled(BaseModel):
    """A GM committed a session day for a game with a notification target."""

    game_id: str
    game_name: str
    day: Weekday
    players: list[str] = Field(default_factory=list)
    target: str
    annotation: str = ""
    scheduled_by: str
    occurred_at: str


Handler = Callable[[DayScheduled], None]


class EventBus:
    """Queue of pending events plus the handlers subscribed to them."""

    def __init__(self) -> None:
        self._handlers: list[Handler] = []
        self._pending: deque[DayScheduled] = deque()

    def subscribe(self, handler: Handler) -> None:
        self._handlers.append(handler)

    def publish(self, event: DayScheduled) -> None:
        self._pending.append(event)

    def pending(self) -> int:
        return len(self._pending)

    def drain(self) -> int:
        """Deliver every queued event to every handler. Returns events delivered."""
        delivered = 0
        while True:
            try:
                event = self._pending.popleft()
            except IndexError:
                break
            for handler in self._handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Event handler failed: event=%s, game_id=%s",
                        type(event).__name__,
                        event.game_id,
                    )
            delivered += 1
        return delivered

    def clear(self) -> None:
        self._pending.clear()
