"""
Tests for the entry normalizer: ordering, tiering and the relative
"last updated" label.
"""
from __future__ import annotations

import pytest
from datetime import date, datetime, timedelta

from recovery_insights.core.errors import InvalidEntryDateError
from recovery_insights.insights import generate_insights
from recovery_insights.insights.entries import JournalEntry, TriState
from recovery_insights.insights.normalizer import (
    format_last_updated,
    normalize,
    parse_day,
)
from recovery_insights.insights.tiers import (
    TIER_POLICIES,
    DataQuality,
    classify,
)

TODAY = date(2026, 10, 19)


def _journal(n: int, start: date = date(2026, 1, 1)) -> dict[str, JournalEntry]:
    return {
        (start + timedelta(days=i)).isoformat(): JournalEntry(had_cravings=i % 2 == 0)
        for i in range(n)
    }


class TestClassify:

    @pytest.mark.parametrize("count,expected", [
        (0, DataQuality.limited),
        (4, DataQuality.limited),
        (5, DataQuality.limited),
        (29, DataQuality.limited),
        (30, DataQuality.good),
        (99, DataQuality.good),
        (100, DataQuality.excellent),
        (1000, DataQuality.excellent),
    ])
    def test_tier_boundaries(self, count, expected):
        assert classify(count) is expected

    def test_every_tier_has_a_policy(self):
        assert set(TIER_POLICIES) == set(DataQuality)

    def test_caps_grow_with_tier(self):
        limited = TIER_POLICIES[DataQuality.limited]
        good = TIER_POLICIES[DataQuality.good]
        excellent = TIER_POLICIES[DataQuality.excellent]
        assert (limited.positive_cap, limited.challenging_cap, limited.insight_cap) == (3, 2, 3)
        assert (good.positive_cap, good.challenging_cap, good.insight_cap) == (4, 3, 4)
        assert (excellent.positive_cap, excellent.challenging_cap, excellent.insight_cap) == (5, 4, 5)

    def test_compound_factors_gated(self):
        assert not TIER_POLICIES[DataQuality.limited].sleep_window
        assert TIER_POLICIES[DataQuality.good].sleep_window
        assert not TIER_POLICIES[DataQuality.good].morning_routine
        assert TIER_POLICIES[DataQuality.excellent].morning_routine


class TestNormalize:

    def test_orders_oldest_first(self):
        entries = {
            "2026-03-05": JournalEntry(),
            "2026-01-20": JournalEntry(),
            "2026-02-11": JournalEntry(),
        }
        result = normalize(entries, TODAY)
        assert [e.day for e in result.entries] == [
            date(2026, 1, 20), date(2026, 2, 11), date(2026, 3, 5),
        ]
        assert result.last_date == date(2026, 3, 5)

    def test_accepts_date_keys(self):
        entries = {date(2026, 10, 18): JournalEntry(), date(2026, 10, 17): JournalEntry()}
        result = normalize(entries, TODAY)
        assert result.count == 2
        assert result.last_updated == "Yesterday"

    def test_recent_window_is_last_30(self):
        result = normalize(_journal(45), TODAY)
        assert result.count == 45
        assert len(result.recent) == 30
        assert result.recent[0].day == date(2026, 1, 16)
        assert result.recent[-1] is result.entries[-1]

    def test_short_history_recent_is_everything(self):
        result = normalize(_journal(8), TODAY)
        assert len(result.recent) == 8

    def test_caller_entries_not_mutated(self):
        original = JournalEntry(mood_positive=True)
        normalize({"2026-10-01": original}, TODAY)
        assert original.day is None

    def test_sufficient_gate(self):
        assert not normalize(_journal(4), TODAY).sufficient
        assert normalize(_journal(5), TODAY).sufficient

    def test_tier_assigned(self):
        assert normalize(_journal(30), TODAY).data_quality is DataQuality.good

    def test_empty_collection(self):
        result = normalize({}, TODAY)
        assert result.count == 0
        assert result.entries == []
        assert result.last_updated == "Never"

    def test_tri_state_coerced(self):
        result = normalize({"2026-10-01": JournalEntry(exercised=False)}, TODAY)
        assert result.entries[0].exercised is TriState.no
        assert result.entries[0].mood_positive is TriState.unset


class TestParseDay:

    def test_iso_string(self):
        assert parse_day("2026-10-19") == date(2026, 10, 19)

    def test_timestamp_string_uses_date_part(self):
        assert parse_day("2026-10-19T07:30:00") == date(2026, 10, 19)

    def test_datetime_key_is_its_day(self):
        assert parse_day(datetime(2026, 10, 19, 8, 30)) == date(2026, 10, 19)

    def test_datetime_keys_analysed(self):
        entries = {datetime(2026, 10, 10 + i, 8): JournalEntry() for i in range(5)}
        result = generate_insights(entries, today=TODAY)
        assert result.entry_count == 5
        assert result.last_updated == "5 days ago"

    def test_mixed_date_and_datetime_keys(self):
        entries = {
            datetime(2026, 10, 17, 22): JournalEntry(),
            date(2026, 10, 15): JournalEntry(),
        }
        result = normalize(entries, TODAY)
        assert [e.day for e in result.entries] == [date(2026, 10, 15), date(2026, 10, 17)]

    def test_keys_for_same_day_collapse(self):
        entries = {f"2026-10-0{i}": JournalEntry(had_cravings=False) for i in range(1, 5)}
        entries[date(2026, 10, 4)] = JournalEntry(had_cravings=False)
        entries["2026-10-04T21:00:00"] = JournalEntry(had_cravings=True)
        result = normalize(entries, TODAY)
        assert result.count == 4
        assert not result.sufficient
        assert result.entries[-1].had_cravings is TriState.yes

    def test_same_day_keys_do_not_pass_gate(self):
        entries = {f"2026-10-0{i}": JournalEntry(had_cravings=False) for i in range(1, 5)}
        entries[date(2026, 10, 4)] = JournalEntry()
        entries["2026-10-04T21:00:00"] = JournalEntry()
        result = generate_insights(entries, today=TODAY)
        assert result.entry_count == 4
        assert result.insights == []
        assert result.positive_patterns == []

    @pytest.mark.parametrize("key", ["2026-01-01garbage", "2026-1-1", "", "2026-02-30"])
    def test_malformed_key_raises(self, key):
        with pytest.raises(InvalidEntryDateError):
            parse_day(key)

    def test_invalid_key_raises(self):
        with pytest.raises(InvalidEntryDateError) as exc:
            parse_day("yesterday")
        assert exc.value.code == "INVALID_ENTRY_DATE"


class TestLastUpdated:

    @pytest.mark.parametrize("days_ago,label", [
        (0, "Today"),
        (1, "Yesterday"),
        (2, "2 days ago"),
        (6, "6 days ago"),
        (7, "1 week ago"),
        (13, "1 week ago"),
        (14, "2 weeks ago"),
        (29, "4 weeks ago"),
        (30, "1 month ago"),
        (59, "1 month ago"),
        (60, "2 months ago"),
        (400, "13 months ago"),
    ])
    def test_relative_labels(self, days_ago, label):
        assert format_last_updated(TODAY - timedelta(days=days_ago), TODAY) == label

    def test_never_without_entries(self):
        assert format_last_updated(None, TODAY) == "Never"

    def test_future_entry_is_today(self):
        assert format_last_updated(TODAY + timedelta(days=1), TODAY) == "Today"
