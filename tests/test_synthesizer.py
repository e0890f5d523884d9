"""
Tests for the insight synthesizer.

Scenarios:
  A) challenging streak -> warning, priority 10, shown first
  B) craving trend over 60 entries -> achievement naming the improvement
  C) sleep/craving and exercise/mood correlations (>= 10 samples)
  D) top pattern call-out only at confidence >= 70
  E) limited-tier starter stats, and the "Building Your Profile" fallback
  F) consistency milestone at 100+ entries
  G) priority ordering and tier caps
"""
from __future__ import annotations

from datetime import date, timedelta

from recovery_insights.insights import generate_insights
from recovery_insights.insights.entries import JournalEntry
from recovery_insights.insights.synthesizer import (
    InsightCategory,
    is_challenging_day,
    longest_challenging_run,
)

START = date(2026, 1, 1)
TODAY = date(2026, 10, 19)

NEUTRAL = {
    "mood_positive": True,
    "sleep_quality": True,
    "had_cravings": False,
    "stress_high": False,
    "energy_level": 7,
}
ROUGH = {
    "had_cravings": True,
    "stress_high": True,
    "mood_positive": False,
}


def _journal(rows: list[dict], start: date = START) -> dict[str, JournalEntry]:
    return {
        (start + timedelta(days=i)).isoformat(): JournalEntry(**row)
        for i, row in enumerate(rows)
    }


def _titles(result) -> list[str]:
    return [i.title for i in result.insights]


# ---------------------------------------------------------------------------
# Challenging streak
# ---------------------------------------------------------------------------

class TestChallengingStreak:

    def test_three_rough_days_raise_warning_first(self):
        result = generate_insights(_journal([NEUTRAL] * 7 + [ROUGH] * 3), today=TODAY)
        first = result.insights[0]
        assert first.category is InsightCategory.warning
        assert first.priority == 10
        assert first.title == "Recovery Alert"
        assert "3 challenging days in a row" in first.description

    def test_two_rough_days_no_warning(self):
        result = generate_insights(
            _journal([NEUTRAL] * 7 + [ROUGH] * 2 + [NEUTRAL]), today=TODAY
        )
        assert all(i.category is not InsightCategory.warning for i in result.insights)

    def test_only_last_seven_entries_scanned(self):
        result = generate_insights(_journal([ROUGH] * 3 + [NEUTRAL] * 7), today=TODAY)
        assert "Recovery Alert" not in _titles(result)

    def test_day_needs_three_signs(self):
        assert is_challenging_day(JournalEntry(**ROUGH))
        assert not is_challenging_day(JournalEntry(had_cravings=True, stress_high=True))

    def test_low_energy_counts_as_a_sign(self):
        entry = JournalEntry(had_cravings=True, sleep_quality=False, energy_level=3)
        assert is_challenging_day(entry)
        assert not is_challenging_day(
            JournalEntry(had_cravings=True, sleep_quality=False, energy_level=4)
        )

    def test_unrecorded_answers_are_not_signs(self):
        assert not is_challenging_day(JournalEntry(had_cravings=True))

    def test_longest_run_not_last_run(self):
        days = [JournalEntry(**row) for row in
                [ROUGH, ROUGH, ROUGH, ROUGH, NEUTRAL, ROUGH, NEUTRAL]]
        assert longest_challenging_run(days) == 4


# ---------------------------------------------------------------------------
# Craving trend
# ---------------------------------------------------------------------------

class TestCravingTrend:

    def _sixty_days(self, first_rate_every: int, last_rate_every: int):
        rows = [{"had_cravings": i % first_rate_every == 0} for i in range(30)]
        rows += [{"had_cravings": i % last_rate_every == 0} for i in range(30)]
        return _journal(rows)

    def test_half_to_fifth_is_thirty_points(self):
        # first 30: every 2nd day (0.5), last 30: every 5th day (0.2)
        result = generate_insights(self._sixty_days(2, 5), today=TODAY)
        trend = [i for i in result.insights if i.title == "Craving Reduction"]
        assert len(trend) == 1
        assert trend[0].category is InsightCategory.achievement
        assert trend[0].priority == 9
        assert "30%" in trend[0].description

    def test_more_cravings_no_trend_insight(self):
        result = generate_insights(self._sixty_days(5, 2), today=TODAY)
        assert "Craving Reduction" not in _titles(result)

    def test_needs_thirty_entries(self):
        rows = [{"had_cravings": True}] * 15 + [{"had_cravings": False}] * 14
        result = generate_insights(_journal(rows), today=TODAY)
        assert "Craving Reduction" not in _titles(result)


# ---------------------------------------------------------------------------
# Correlations
# ---------------------------------------------------------------------------

class TestCorrelations:

    def test_sleep_craving_connection(self):
        rows = (
            [{"sleep_quality": True, "had_cravings": False}] * 6
            + [{"sleep_quality": False, "had_cravings": True}] * 4
        )
        result = generate_insights(_journal(rows), today=TODAY)
        found = [i for i in result.insights if i.title == "Sleep-Craving Connection"]
        assert len(found) == 1
        assert found[0].priority == 8
        assert found[0].category is InsightCategory.correlation
        assert found[0].description.startswith("100%")

    def test_sleep_connection_needs_ten_samples(self):
        rows = (
            [{"sleep_quality": True, "had_cravings": False}] * 5
            + [{"sleep_quality": False, "had_cravings": True}] * 4
        )
        result = generate_insights(_journal(rows), today=TODAY)
        assert "Sleep-Craving Connection" not in _titles(result)

    def test_weak_agreement_not_reported(self):
        # 6 of 10 agree -> 0.6, threshold is strictly above
        rows = (
            [{"sleep_quality": True, "had_cravings": False}] * 6
            + [{"sleep_quality": True, "had_cravings": True}] * 4
        )
        result = generate_insights(_journal(rows), today=TODAY)
        assert "Sleep-Craving Connection" not in _titles(result)

    def test_movement_mood(self):
        rows = (
            [{"exercised": True, "mood_positive": True}] * 5
            + [{"exercised": False, "mood_positive": False}] * 5
        )
        result = generate_insights(_journal(rows), today=TODAY)
        found = [i for i in result.insights if i.title == "Movement = Mood"]
        assert len(found) == 1
        assert found[0].priority == 7
        assert "100% positive mood rate" in found[0].description


# ---------------------------------------------------------------------------
# Top pattern
# ---------------------------------------------------------------------------

class TestTopPattern:

    def test_confident_pattern_called_out(self):
        rows = (
            [{"sleep_quality": True, "had_cravings": False}] * 5
            + [{"sleep_quality": False, "had_cravings": True}] * 5
        )
        result = generate_insights(_journal(rows), today=TODAY)
        found = [i for i in result.insights if i.title == "Your Success Factor"]
        assert len(found) == 1
        assert found[0].priority == 8
        assert "Good sleep quality" in found[0].description
        assert "(100%)" in found[0].description

    def test_low_confidence_pattern_not_called_out(self):
        rows = (
            [{"sleep_quality": True, "had_cravings": False}] * 3
            + [{"sleep_quality": False, "had_cravings": True}] * 3
        )
        result = generate_insights(_journal(rows), today=TODAY)
        assert result.positive_patterns[0].confidence == 50
        assert "Your Success Factor" not in _titles(result)


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

class TestFallbacks:

    def test_limited_tier_starter_stats(self):
        rows = []
        for i in range(8):
            rows.append({
                "had_cravings": i < 2,
                "mood_positive": i >= 2,
                "exercised": i % 2 == 0,
            })
        result = generate_insights(_journal(rows), today=TODAY)
        assert _titles(result) == ["Craving Control", "Positive Momentum", "Active Recovery"]
        assert [i.priority for i in result.insights] == [7, 6, 5]
        assert "6 out of 8 days" in result.insights[0].description
        assert "22 more entries" in result.insights[1].description

    def test_starter_stats_count_recorded_days_only(self):
        rows = [{"had_cravings": False}] * 3 + [{}] * 5
        result = generate_insights(_journal(rows), today=TODAY)
        assert "3 out of 3 days" in result.insights[0].description

    def test_building_profile_when_nothing_else(self):
        result = generate_insights(_journal([{}] * 5), today=TODAY)
        assert len(result.insights) == 1
        only = result.insights[0]
        assert only.title == "Building Your Profile"
        assert only.category is InsightCategory.trend
        assert only.priority == 5
        assert "5 days tracked" in only.description
        assert "30 days" in only.description

    def test_good_tier_skips_starter_stats(self):
        rows = [{"had_cravings": False, "exercised": True}] * 30
        result = generate_insights(_journal(rows), today=TODAY)
        assert _titles(result) == ["Building Your Profile"]


# ---------------------------------------------------------------------------
# Consistency milestone
# ---------------------------------------------------------------------------

class TestConsistency:

    def test_champion_at_one_hundred_entries(self):
        result = generate_insights(_journal([NEUTRAL] * 100), today=TODAY)
        found = [i for i in result.insights if i.title == "Consistency Champion"]
        assert len(found) == 1
        assert "100%" in found[0].description
        assert found[0].category is InsightCategory.achievement

    def test_not_before_one_hundred_entries(self):
        result = generate_insights(_journal([NEUTRAL] * 99), today=TODAY)
        assert "Consistency Champion" not in _titles(result)

    def test_sparse_journal_not_champion(self):
        rows = [NEUTRAL] * 70 + [{"mood_positive": True}] * 30
        result = generate_insights(_journal(rows), today=TODAY)
        assert "Consistency Champion" not in _titles(result)


# ---------------------------------------------------------------------------
# Ordering and caps
# ---------------------------------------------------------------------------

class TestOrderingAndCaps:

    def _busy_journal(self):
        good_day = {
            "sleep_quality": True, "had_cravings": False,
            "exercised": True, "mood_positive": True, "energy_level": 8,
        }
        bad_day = {
            "sleep_quality": False, "had_cravings": True,
            "exercised": False, "mood_positive": False, "stress_high": True,
        }
        return _journal([good_day] * 9 + [bad_day] * 3)

    def test_limited_cap_is_three(self):
        result = generate_insights(self._busy_journal(), today=TODAY)
        assert len(result.insights) == 3
        assert [i.priority for i in result.insights] == [10, 8, 8]
        assert "Movement = Mood" not in _titles(result)

    def test_sorted_by_priority(self):
        result = generate_insights(self._busy_journal(), today=TODAY)
        priorities = [i.priority for i in result.insights]
        assert priorities == sorted(priorities, reverse=True)
