# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the availability engine: intersection, match scoring,
divergence explanations, and the schedule announcement text.
"""

import pytest

from gamenight.models.domain import (
    InvalidDay,
    MatchBand,
    Weekday,
    WEEKDAYS,
    canonical_days,
    parse_weekday,
)
from gamenight.services.availability import (
    BAND_COLORS,
    classify_match,
    common_days,
    score_days,
    voted_days,
)
from gamenight.services.divergence import (
    closest_days,
    explain_divergence,
    join_names,
    missing_voters,
)
from gamenight.services.notification_client import compose_schedule_message

MON, TUE, WED, THU, FRI, SAT, SUN = WEEKDAYS


# ============================================
# Weekday domain
# ============================================
class TestWeekdays:
    def test_seven_days_in_order(self):
        assert [d.value for d in WEEKDAYS] == [
            "Monday", "Tuesday", "Wednesday", "Thursday",
            "Friday", "Saturday", "Sunday",
        ]

    def test_parse_valid_label(self):
        assert parse_weekday("Friday") is FRI

    def test_parse_rejects_unknown_label(self):
        with pytest.raises(InvalidDay):
            parse_weekday("Funday")

    def test_parse_is_case_sensitive(self):
        with pytest.raises(InvalidDay):
            parse_weekday("monday")

    def test_canonical_days_dedupes_and_sorts(self):
        assert canonical_days(["Sunday", "Monday", "Sunday", TUE]) == [MON, TUE, SUN]

    def test_canonical_days_rejects_whole_batch(self):
        with pytest.raises(InvalidDay):
            canonical_days(["Monday", "Someday"])


# ============================================
# Intersection
# ============================================
class TestCommonDays:
    def test_no_voters_is_empty(self):
        assert common_days({}) == []

    def test_single_voter_returns_their_set(self):
        assert common_days({"alice": [FRI, MON, WED]}) == [MON, WED, FRI]

    def test_day_everyone_has_is_included(self):
        votes = {"alice": [MON, SAT], "bob": [SAT, SUN], "carol": [TUE, SAT]}
        assert SAT in common_days(votes)

    def test_intersection_of_overlapping_sets(self):
        votes = {"alice": [MON, TUE], "bob": [TUE, WED]}
        assert common_days(votes) == [TUE]

    def test_disjoint_sets(self):
        assert common_days({"alice": [MON], "bob": [WED]}) == []

    def test_empty_voter_empties_intersection(self):
        assert common_days({"alice": [MON], "bob": []}) == []

    def test_order_is_independent_of_insertion(self):
        a = {"alice": [SUN, MON, FRI], "bob": [FRI, SUN, MON]}
        b = {"bob": [MON, FRI, SUN], "alice": [FRI, MON, SUN]}
        assert common_days(a) == common_days(b) == [MON, FRI, SUN]

    def test_accepts_string_labels(self):
        assert common_days({"alice": ["Monday", "Tuesday"], "bob": ["Tuesday"]}) == [TUE]


# ============================================
# Match scoring
# ============================================
class TestClassifyMatch:
    @pytest.mark.parametrize(
        "count,total,band",
        [
            (5, 5, MatchBand.FULL),
            (4, 5, MatchBand.HIGH),
            (3, 5, MatchBand.MODERATE_HIGH),
            (2, 5, MatchBand.MODERATE),
            (1, 5, MatchBand.LOW),
            (0, 5, MatchBand.MINIMAL),
            (1, 2, MatchBand.MODERATE),
            (1, 6, MatchBand.MINIMAL),
            (9, 10, MatchBand.HIGH),
        ],
    )
    def test_bands(self, count, total, band):
        assert classify_match(count, total) == band

    def test_zero_voters_is_neutral(self):
        assert classify_match(0, 0) == MatchBand.NEUTRAL

    def test_every_band_has_a_color(self):
        assert set(BAND_COLORS) == set(MatchBand)


class TestScoreDays:
    def test_scores_only_voted_days_by_default(self):
        votes = {"alice": [MON, TUE], "bob": [TUE, WED]}
        assert [s.day for s in score_days(votes)] == [MON, TUE, WED]

    def test_scenario_a(self):
        votes = {"alice": [MON, TUE], "bob": [TUE, WED]}
        scores = {s.day: s for s in score_days(votes)}
        assert (scores[MON].match_count, scores[MON].total_voters) == (1, 2)
        assert scores[MON].band == MatchBand.MODERATE
        assert scores[TUE].band == MatchBand.FULL
        assert scores[TUE].color == "#4CAF50"
        assert scores[WED].band == MatchBand.MODERATE

    def test_no_voters_scores_nothing(self):
        assert score_days({}) == []

    def test_no_voters_explicit_days_are_neutral(self):
        scores = score_days({}, days=WEEKDAYS)
        assert len(scores) == 7
        assert all(s.band == MatchBand.NEUTRAL for s in scores)
        assert all(s.color == "#666" for s in scores)

    def test_explicit_day_nobody_picked_is_minimal(self):
        (score,) = score_days({"alice": [MON]}, days=[SUN])
        assert score.match_count == 0
        assert score.band == MatchBand.MINIMAL

    def test_voted_days_ignores_empty_voters(self):
        assert voted_days({"alice": [], "bob": [THU]}) == [THU]


# ============================================
# Divergence analysis
# ============================================
class TestJoinNames:
    def test_one(self):
        assert join_names(["alice"]) == "alice"

    def test_two(self):
        assert join_names(["alice", "bob"]) == "alice and bob"

    def test_three(self):
        assert join_names(["alice", "bob", "carol"]) == "alice, bob and carol"


class TestExplainDivergence:
    def test_scenario_c_nobody_voted(self):
        assert explain_divergence({}) == "No players have voted yet."

    def test_single_voter_is_named(self):
        assert explain_divergence({"alice": [MON]}) == "Only alice has voted so far."

    def test_scenario_d_single_empty_voter_flagged(self):
        text = explain_divergence({"alice": []})
        assert "Only alice has voted so far" in text
        assert "alice has not selected any days" in text
        assert text != explain_divergence({})

    def test_empty_voter_called_out_before_miss_analysis(self):
        text = explain_divergence({"alice": [MON], "bob": [MON], "carol": []})
        assert text == "carol has not selected any days."

    def test_several_empty_voters(self):
        text = explain_divergence({"zed": [], "alice": [], "bob": [TUE]})
        assert text == "alice and zed have not selected any days."

    def test_single_best_day_one_blocker(self):
        votes = {"alice": [MON, FRI], "bob": [FRI], "carol": [MON]}
        # Monday misses bob, Friday misses carol: tie
        assert "Monday or Friday" in explain_divergence(votes)

        votes = {"alice": [FRI], "bob": [FRI], "carol": [MON]}
        assert explain_divergence(votes) == (
            "Friday is closest to working, but carol is not available."
        )

    def test_single_best_day_several_blockers(self):
        votes = {
            "alice": [SAT],
            "bob": [SAT, SUN],
            "carol": [SAT],
            "dave": [TUE],
            "erin": [WED],
        }
        assert explain_divergence(votes) == (
            "Saturday is closest to working, but dave and erin are not available."
        )

    def test_scenario_b_tie_lists_both_days(self):
        text = explain_divergence({"alice": [MON], "bob": [WED]})
        assert text == (
            "No days work for everyone. Try Monday or Wednesday, "
            "which have the most availability."
        )

    def test_tie_order_is_canonical_not_insertion(self):
        a = explain_divergence({"bob": [SUN], "alice": [TUE]})
        b = explain_divergence({"alice": [TUE], "bob": [SUN]})
        assert a == b
        assert "Tuesday or Sunday" in a

    def test_universal_day_named_when_called_directly(self):
        votes = {"alice": [MON, TUE], "bob": [TUE]}
        assert explain_divergence(votes) == "Tuesday works for everyone."

        votes = {"bob": [SAT, FRI, MON], "alice": [FRI, SAT]}
        assert explain_divergence(votes) == "Friday and Saturday work for everyone."

    def test_blockers_sorted_by_identifier(self):
        votes = {"zoe": [MON], "yan": [MON], "bob": [FRI], "amy": [THU], "cal": [MON]}
        assert explain_divergence(votes) == (
            "Monday is closest to working, but amy and bob are not available."
        )


class TestMissSets:
    def test_missing_voters(self):
        votes = {"alice": [MON], "bob": [TUE], "carol": [MON]}
        assert missing_voters(votes, MON) == ["bob"]

    def test_closest_days_returns_minimum(self):
        votes = {"alice": [MON, TUE], "bob": [TUE], "carol": [MON]}
        assert closest_days(votes) == ([MON, TUE], 1)

    def test_closest_days_no_votes(self):
        assert closest_days({"alice": []}) == ([], 0)


# ============================================
# Announcement text
# ============================================
class TestComposeScheduleMessage:
    def test_body_fields(self):
        text = compose_schedule_message("Curse of Strahd", FRI, ["alice", "bob"])
        assert text == (
            "**Game Session Scheduled!**\n"
            "📅 Game: Curse of Strahd\n"
            "📆 Date: Friday\n"
            "👥 Players: alice, bob"
        )

    def test_annotation_prepended_verbatim(self):
        text = compose_schedule_message("Strahd", SAT, [], annotation="@everyone")
        assert text.startswith("@everyone\n\n**Game Session Scheduled!**")

    def test_empty_roster(self):
        assert compose_schedule_message("Strahd", SAT, []).endswith("👥 Players: ")
