# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Webhook notification client — outbound session announcements.
Posts Discord-style ``{"content": ...}`` payloads with a timeout.
"""

import httpx

from gamenight.core.config import settings
from gamenight.core.logging import get_logger
from gamenight.metrics.prometheus import NOTIFICATIONS_SENT
from gamenight.models.domain import Weekday
from gamenight.services.events import DayScheduled

logger = get_logger(__name__)


def compose_schedule_message(
    game_name: str,
    day: Weekday,
    players: list[str],
    annotation: str = "",
) -> str:
    """Announcement body; a non-empty annotation (e.g. @everyone) goes first verbatim."""
    body = (
        "**Game Session Scheduled!**\n"
        f"📅 Game: {game_name}\n"
        f"📆 Date: {Weekday(day).value}\n"
        f"👥 Players: {', '.join(players)}"
    )
    if annotation:
        return f"{annotation}\n\n{body}"
    return body


class WebhookNotifier:
    """Best-effort webhook sender. Failures are logged but never raised."""

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout if timeout is not None else settings.NOTIFICATION_TIMEOUT

    def send(self, target: str, message: str) -> bool:
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(target, json={"content": message})
                resp.raise_for_status()
        except Exception as exc:
            NOTIFICATIONS_SENT.labels(status="failed").inc()
            # str(exc) carries the target URL, which embeds the webhook token
            detail = type(exc).__name__
            if isinstance(exc, httpx.HTTPStatusError):
                detail = f"{detail} status={exc.response.status_code}"
            logger.warning("Webhook notification failed: %s", detail)
            return False
        NOTIFICATIONS_SENT.labels(status="sent").inc()
        logger.info("Webhook notification sent: status=%d", resp.status_code)
        return True

    def handle(self, event: DayScheduled) -> None:
        """EventBus subscriber for DayScheduled."""
        message = compose_schedule_message(
            event.game_name, event.day, event.players, event.annotation
        )
        self.send(event.target, message)
