# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field, field_validator


class Weekday(str, Enum):
    """The seven votable days. Declaration order is the canonical order."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)
_WEEKDAY_INDEX: dict[Weekday, int] = {day: i for i, day in enumerate(WEEKDAYS)}


class InvalidDay(ValueError):
    """A day label outside Monday..Sunday."""


def parse_weekday(value: str | Weekday) -> Weekday:
    """Coerce a label to a Weekday. Raises InvalidDay for anything else."""
    if isinstance(value, Weekday):
        return value
    try:
        return Weekday(value)
    except ValueError:
        raise InvalidDay(f"'{value}' is not a weekday") from None


def canonical_days(days: Iterable[str | Weekday]) -> list[Weekday]:
    """Deduplicate and sort days Monday→Sunday. Raises InvalidDay."""
    return sorted({parse_weekday(d) for d in days}, key=_WEEKDAY_INDEX.__getitem__)


class MatchBand(str, Enum):
    """Severity band for the fraction of voters available on a day."""

    FULL = "full"
    HIGH = "high"
    MODERATE_HIGH = "moderate_high"
    MODERATE = "moderate"
    LOW = "low"
    MINIMAL = "minimal"
    NEUTRAL = "neutral"


class Effect(str, Enum):
    """Cosmetic title effect shown next to a game's name."""

    NONE = "none"
    SNOW = "snow"
    ELECTRICITY = "electricity"
    GLITCH = "glitch"
    SWORDS = "swords"


class Game(BaseModel):
    """A game and its availability record store."""

    id: str
    name: str = Field(..., min_length=1, max_length=255)
    owner: str
    players: list[str] = Field(default_factory=list)
    votes: dict[str, list[Weekday]] = Field(default_factory=dict)
    scheduled_day: Optional[Weekday] = None
    webhook_url: Optional[str] = None
    effect: Effect = Effect.NONE
    created_at: str
    updated_at: Optional[str] = None

    @field_validator("votes")
    @classmethod
    def normalise_votes(cls, v: dict[str, list[Weekday]]) -> dict[str, list[Weekday]]:
        return {player: canonical_days(days) for player, days in v.items()}


class User(BaseModel):
    """A registered player or GM."""

    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    is_gm: bool = False
    games: list[str] = Field(default_factory=list)
    created_at: str
