"""
Data-quality tiers.

How much analysis runs, and how much of it is shown, depends only on how
many days the user has logged. Everything tier-dependent lives in
TIER_POLICIES so the rules elsewhere never branch on the tier by name.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

MIN_ENTRIES = 5
RECENT_WINDOW = 30
STREAK_WINDOW = 7

GOOD_THRESHOLD = 30
EXCELLENT_THRESHOLD = 100


class DataQuality(str, enum.Enum):
    limited = "limited"
    good = "good"
    excellent = "excellent"


@dataclass(frozen=True)
class TierPolicy:
    positive_cap: int
    challenging_cap: int
    insight_cap: int
    sleep_window: bool       # "7-9 hours of sleep" pattern is evaluated
    morning_routine: bool    # "Complete morning routine" pattern is evaluated
    fallback_insights: bool  # raw-count insights when nothing else was found


TIER_POLICIES: dict[DataQuality, TierPolicy] = {
    DataQuality.limited: TierPolicy(
        positive_cap=3, challenging_cap=2, insight_cap=3,
        sleep_window=False, morning_routine=False, fallback_insights=True,
    ),
    DataQuality.good: TierPolicy(
        positive_cap=4, challenging_cap=3, insight_cap=4,
        sleep_window=True, morning_routine=False, fallback_insights=False,
    ),
    DataQuality.excellent: TierPolicy(
        positive_cap=5, challenging_cap=4, insight_cap=5,
        sleep_window=True, morning_routine=True, fallback_insights=False,
    ),
}


def classify(entry_count: int) -> DataQuality:
    if entry_count < GOOD_THRESHOLD:
        return DataQuality.limited
    if entry_count < EXCELLENT_THRESHOLD:
        return DataQuality.good
    return DataQuality.excellent


def policy_for(quality: DataQuality) -> TierPolicy:
    return TIER_POLICIES[quality]
