# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Availability aggregation — pure computation, no side effects.
Intersection of every voter's days and the per-day match score.
"""

from functools import reduce
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel

from gamenight.models.domain import MatchBand, Weekday, canonical_days

Votes = Mapping[str, Iterable[Weekday]]

WEEK_SET: frozenset[Weekday] = frozenset(Weekday)

# Lower bound of each band, highest first. FULL and NEUTRAL are handled apart.
BAND_THRESHOLDS: tuple[tuple[float, MatchBand], ...] = (
    (0.8, MatchBand.HIGH),
    (0.6, MatchBand.MODERATE_HIGH),
    (0.4, MatchBand.MODERATE),
    (0.2, MatchBand.LOW),
)

BAND_COLORS: dict[MatchBand, str] = {
    MatchBand.FULL: "#4CAF50",
    MatchBand.HIGH: "#8BC34A",
    MatchBand.MODERATE_HIGH: "#FFEB3B",
    MatchBand.MODERATE: "#FF9800",
    MatchBand.LOW: "#FF5722",
    MatchBand.MINIMAL: "#F44336",
    MatchBand.NEUTRAL: "#666",
}


class DayScore(BaseModel):
    day: Weekday
    match_count: int
    total_voters: int
    band: MatchBand
    color: str


def common_days(votes: Votes) -> list[Weekday]:
    """Days present in every voter's set, Monday→Sunday. No voters → []."""
    if not votes:
        return []
    shared = reduce(
        lambda acc, days: acc & set(canonical_days(days)), votes.values(), set(WEEK_SET)
    )
    return canonical_days(shared)


def voted_days(votes: Votes) -> list[Weekday]:
    """Distinct days that received at least one vote."""
    return canonical_days(day for days in votes.values() for day in days)


def count_available(votes: Votes, day: Weekday) -> int:
    return sum(1 for days in votes.values() if day in canonical_days(days))


def classify_match(match_count: int, total_voters: int) -> MatchBand:
    """Map match_count / total_voters to a band. Zero voters → NEUTRAL."""
    if total_voters <= 0:
        return MatchBand.NEUTRAL
    if match_count >= total_voters:
        return MatchBand.FULL
    fraction = match_count / total_voters
    for lower_bound, band in BAND_THRESHOLDS:
        if fraction >= lower_bound:
            return band
    return MatchBand.MINIMAL


def score_day(votes: Votes, day: Weekday) -> DayScore:
    total = len(votes)
    matched = count_available(votes, day)
    band = classify_match(matched, total)
    return DayScore(
        day=day,
        match_count=matched,
        total_voters=total,
        band=band,
        color=BAND_COLORS[band],
    )


def score_days(votes: Votes, days: Optional[Iterable[Weekday]] = None) -> list[DayScore]:
    """
    Score each day, by default every day that received a vote.
    Pass ``days`` to score an explicit selection (e.g. the whole week).
    """
    selected = voted_days(votes) if days is None else canonical_days(days)
    return [score_day(votes, day) for day in selected]
