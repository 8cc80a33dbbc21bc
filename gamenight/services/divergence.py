# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Divergence analysis — explains why no day works for everyone.
Pure function over the votes mapping; the text is identical for equal
inputs regardless of dict insertion order.
"""

from gamenight.models.domain import Weekday, canonical_days
from gamenight.services.availability import Votes, voted_days


def join_names(names: list[str]) -> str:
    """'A', 'A and B', 'A, B and C'."""
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


def missing_voters(votes: Votes, day: Weekday) -> list[str]:
    """Voters who did not include ``day``, sorted by identifier."""
    return sorted(p for p, days in votes.items() if day not in canonical_days(days))


def closest_days(votes: Votes) -> tuple[list[Weekday], int]:
    """
    Voted days with the smallest miss set, Monday→Sunday, and that size.
    Returns ([], 0) when nobody voted for anything.
    """
    days = voted_days(votes)
    miss_counts = {day: len(missing_voters(votes, day)) for day in days}
    if not miss_counts:
        return [], 0
    fewest = min(miss_counts.values())
    return [d for d in days if miss_counts[d] == fewest], fewest


def explain_divergence(votes: Votes) -> str:
    """
    Explain the best achievable compromise for a game with no common day.

    Callers only ask when the intersection is empty. Precedence:
    no voters, a single voter, voters with nothing selected, then the
    day(s) closest to universal agreement.
    """
    voters = sorted(votes)
    if not voters:
        return "No players have voted yet."

    empty_voters = [p for p in voters if not canonical_days(votes[p])]

    if len(voters) == 1:
        only = voters[0]
        if empty_voters:
            return f"Only {only} has voted so far, and {only} has not selected any days."
        return f"Only {only} has voted so far."

    if empty_voters:
        verb = "have" if len(empty_voters) > 1 else "has"
        return f"{join_names(empty_voters)} {verb} not selected any days."

    best, fewest = closest_days(votes)
    if fewest == 0:
        verb = "work" if len(best) > 1 else "works"
        return f"{join_names([d.value for d in best])} {verb} for everyone."

    if len(best) == 1:
        blockers = missing_voters(votes, best[0])
        verb = "are" if len(blockers) > 1 else "is"
        return (
            f"{best[0].value} is closest to working, but "
            f"{join_names(blockers)} {verb} not available."
        )
    options = " or ".join(day.value for day in best)
    return f"No days work for everyone. Try {options}, which have the most availability."
