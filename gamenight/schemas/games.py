# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from gamenight.models.domain import Effect, Weekday
from gamenight.services.availability import DayScore

WEBHOOK_PATTERN = r"^https?://\S+$"


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ── User Schemas ──

class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    gm_secret: str = Field(default="", max_length=255, description="Grants the GM role when it matches")


class UserResponse(BaseModel):
    username: str
    email: str
    is_gm: bool
    games: list[str]
    created_at: str


# ── Game Schemas ──

class GameCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Game name")
    effect: Effect = Effect.NONE
    webhook_url: Optional[str] = Field(default=None, pattern=WEBHOOK_PATTERN, max_length=2048)

    @field_validator("webhook_url", mode="before")
    @classmethod
    def blank_webhook_clears(cls, v):
        return _blank_to_none(v)


class GameResponse(BaseModel):
    """Owner's view of the whole record."""
    id: str
    name: str
    owner: str
    players: list[str]
    votes: dict[str, list[Weekday]]
    scheduled_day: Optional[Weekday] = None
    webhook_url: Optional[str] = None
    effect: Effect
    created_at: str
    updated_at: Optional[str] = None


class GameSummary(BaseModel):
    id: str
    name: str
    owner: str
    effect: Effect
    scheduled_day: Optional[Weekday] = None


class PlayerGameView(GameSummary):
    players: list[str]
    my_votes: list[Weekday]


# ── Vote / Schedule Schemas ──

class VoteRequest(BaseModel):
    days: list[Weekday] = Field(default_factory=list, description="Available weekdays; duplicates collapse")


class ScheduleRequest(BaseModel):
    scheduled_day: Optional[Weekday] = Field(default=None, description="Empty clears the schedule")
    annotation: str = Field(default="", max_length=2000, description="Prepended to the announcement, e.g. @everyone")

    @field_validator("scheduled_day", mode="before")
    @classmethod
    def blank_day_clears(cls, v):
        return _blank_to_none(v)


class WebhookUpdateRequest(BaseModel):
    webhook_url: Optional[str] = Field(default=None, pattern=WEBHOOK_PATTERN, max_length=2048)

    @field_validator("webhook_url", mode="before")
    @classmethod
    def blank_webhook_clears(cls, v):
        return _blank_to_none(v)


class AssignPlayerRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)


class AvailabilityResponse(BaseModel):
    game_id: str
    name: str
    total_voters: int
    votes: dict[str, list[Weekday]]
    common_days: list[Weekday]
    day_scores: list[DayScore]
    explanation: Optional[str] = None
    scheduled_day: Optional[Weekday] = None
    scheduled_score: Optional[DayScore] = None
