"""
Insight synthesizer.

Rules (each returns zero or more candidate insights)
----------------------------------------------------
  1. craving_trend      first 30 vs last 30 entries; cravings dropped  -> achievement, 9
  2. correlations       sleep/cravings agree > 60%                     -> correlation, 8
                        exercise/mood agree > 50%                      -> correlation, 7
  3. top_pattern        strongest positive pattern, confidence >= 70   -> correlation, 8
  4. challenging_streak >= 3 challenging days in a row (last 7)        -> warning, 10
  5. consistency        >= 100 entries, >= 80% with core fields filled -> achievement, 7

Fallbacks (see what the rules above produced)
---------------------------------------------
  6. starter_stats      limited tier and nothing found: raw counts     -> 7 / 6 / 5
  7. building_profile   still nothing                                  -> trend, 5

The combined list is sorted by priority (highest first) and capped per
tier. Once the 5-entry gate is passed the result is never empty.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from recovery_insights.insights.entries import JournalEntry, TriState, scale
from recovery_insights.insights.numeric import count, points, rate, round_half_up
from recovery_insights.insights.patterns import PatternSet
from recovery_insights.insights.tiers import (
    EXCELLENT_THRESHOLD,
    RECENT_WINDOW,
    STREAK_WINDOW,
    DataQuality,
    policy_for,
)

logger = logging.getLogger(__name__)

MIN_CORRELATION_SAMPLES = 10
SLEEP_CRAVING_THRESHOLD = 0.6
EXERCISE_MOOD_THRESHOLD = 0.5
TOP_PATTERN_MIN_CONFIDENCE = 70
CHALLENGING_DAY_FACTORS = 3
LOW_ENERGY = 3
STREAK_ALERT_DAYS = 3
CONSISTENCY_MIN_RATE = 80
MIN_EXERCISE_DAYS = 3


class InsightCategory(str, enum.Enum):
    correlation = "correlation"
    trend = "trend"
    achievement = "achievement"
    warning = "warning"


@dataclass
class Insight:
    icon: str
    title: str
    description: str
    priority: int      # 1-10, higher first
    category: InsightCategory


@dataclass
class InsightContext:
    entries: Sequence[JournalEntry]   # full history, oldest first
    recent: Sequence[JournalEntry]    # last RECENT_WINDOW entries
    patterns: PatternSet
    data_quality: DataQuality


Rule = Callable[[InsightContext], list[Insight]]
Fallback = Callable[[InsightContext, list[Insight]], list[Insight]]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def craving_trend(ctx: InsightContext) -> list[Insight]:
    if len(ctx.entries) < RECENT_WINDOW:
        return []
    first = rate(e.had_cravings for e in ctx.entries[:RECENT_WINDOW])
    last = rate(e.had_cravings for e in ctx.entries[-RECENT_WINDOW:])
    if first is None or last is None or last >= first:
        return []
    improvement = points(first - last)
    return [Insight(
        icon="trending-down",
        title="Craving Reduction",
        description=(
            f"Your cravings decreased by {improvement}% compared to your first month."
        ),
        priority=9,
        category=InsightCategory.achievement,
    )]


def correlations(ctx: InsightContext) -> list[Insight]:
    found: list[Insight] = []

    sleep = [
        e for e in ctx.recent
        if e.sleep_quality.recorded and e.had_cravings.recorded
    ]
    if len(sleep) >= MIN_CORRELATION_SAMPLES:
        agree = sum(
            1 for e in sleep
            if (e.sleep_quality is TriState.yes) == (e.had_cravings is TriState.no)
        )
        agreement = agree / len(sleep)
        if agreement > SLEEP_CRAVING_THRESHOLD:
            found.append(Insight(
                icon="moon",
                title="Sleep-Craving Connection",
                description=(
                    f"{round_half_up(agreement * 100)}% of the time, "
                    "your sleep quality predicts your cravings."
                ),
                priority=8,
                category=InsightCategory.correlation,
            ))

    moving = [
        e for e in ctx.recent
        if e.exercised.recorded and e.mood_positive.recorded
    ]
    if len(moving) >= MIN_CORRELATION_SAMPLES:
        agree = sum(
            1 for e in moving
            if (e.exercised is TriState.yes) == (e.mood_positive is TriState.yes)
        )
        agreement = agree / len(moving)
        exercise_days = [e for e in moving if e.exercised is TriState.yes]
        if agreement > EXERCISE_MOOD_THRESHOLD and exercise_days:
            mood_rate = rate(e.mood_positive for e in exercise_days)
            found.append(Insight(
                icon="fitness",
                title="Movement = Mood",
                description=(
                    f"Exercise days show {round_half_up(mood_rate * 100)}% "
                    "positive mood rate."
                ),
                priority=7,
                category=InsightCategory.correlation,
            ))

    return found


def top_pattern(ctx: InsightContext) -> list[Insight]:
    if not ctx.patterns.positive:
        return []
    best = ctx.patterns.positive[0]
    if best.confidence < TOP_PATTERN_MIN_CONFIDENCE:
        return []
    return [Insight(
        icon="star",
        title="Your Success Factor",
        description=(
            f"{best.factor} shows the strongest positive impact "
            f"({best.impact}%) on your recovery."
        ),
        priority=8,
        category=InsightCategory.correlation,
    )]


def is_challenging_day(entry: JournalEntry) -> bool:
    """True when at least three warning signs were recorded for the day."""
    energy = scale(entry, "energy_level")
    signs = (
        entry.had_cravings is TriState.yes,
        entry.stress_high is TriState.yes,
        entry.mood_positive is TriState.no,
        entry.sleep_quality is TriState.no,
        energy is not None and energy <= LOW_ENERGY,
    )
    return sum(signs) >= CHALLENGING_DAY_FACTORS


def longest_challenging_run(entries: Sequence[JournalEntry]) -> int:
    run = longest = 0
    for entry in entries[-STREAK_WINDOW:]:
        if is_challenging_day(entry):
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest


def challenging_streak(ctx: InsightContext) -> list[Insight]:
    days = longest_challenging_run(ctx.entries)
    if days < STREAK_ALERT_DAYS:
        return []
    return [Insight(
        icon="alert-circle",
        title="Recovery Alert",
        description=(
            f"You've had {days} challenging days in a row. "
            "Consider using your coping strategies."
        ),
        priority=10,
        category=InsightCategory.warning,
    )]


def consistency_rate(entries: Sequence[JournalEntry]) -> int:
    if not entries:
        return 0
    complete = sum(
        1 for e in entries
        if e.mood_positive.recorded
        and e.had_cravings.recorded
        and e.sleep_quality.recorded
        and scale(e, "energy_level") is not None
    )
    return round_half_up(complete / len(entries) * 100)


def consistency(ctx: InsightContext) -> list[Insight]:
    if len(ctx.entries) < EXCELLENT_THRESHOLD:
        return []
    percent = consistency_rate(ctx.entries)
    if percent < CONSISTENCY_MIN_RATE:
        return []
    return [Insight(
        icon="trophy",
        title="Consistency Champion",
        description=(
            f"You've maintained {percent}% journal consistency. "
            "This dedication drives recovery success."
        ),
        priority=7,
        category=InsightCategory.achievement,
    )]


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

def starter_stats(ctx: InsightContext, found: list[Insight]) -> list[Insight]:
    if found or not policy_for(ctx.data_quality).fallback_insights:
        return []

    stats: list[Insight] = []
    cravings = [e.had_cravings for e in ctx.recent]
    recorded = sum(1 for c in cravings if c.recorded)
    craving_days = count(cravings, TriState.yes)
    if recorded and craving_days < recorded / 2:
        stats.append(Insight(
            icon="shield-checkmark",
            title="Craving Control",
            description=(
                f"You managed cravings on {recorded - craving_days} out of "
                f"{recorded} days. Keep tracking - more data reveals deeper patterns!"
            ),
            priority=7,
            category=InsightCategory.achievement,
        ))

    moods = [e.mood_positive for e in ctx.recent]
    mood_recorded = sum(1 for m in moods if m.recorded)
    good_days = count(moods, TriState.yes)
    if mood_recorded and good_days > mood_recorded / 2:
        remaining = max(RECENT_WINDOW - len(ctx.entries), 0)
        stats.append(Insight(
            icon="happy",
            title="Positive Momentum",
            description=(
                f"{good_days} positive mood days! With {remaining} more entries, "
                "we'll uncover what drives your best days."
            ),
            priority=6,
            category=InsightCategory.trend,
        ))

    exercise_days = count((e.exercised for e in ctx.recent), TriState.yes)
    if exercise_days >= MIN_EXERCISE_DAYS:
        stats.append(Insight(
            icon="fitness",
            title="Active Recovery",
            description=(
                f"{exercise_days} exercise days logged. "
                "Physical activity supports your recovery journey."
            ),
            priority=5,
            category=InsightCategory.achievement,
        ))
    return stats


def building_profile(ctx: InsightContext, found: list[Insight]) -> list[Insight]:
    if found:
        return []
    return [Insight(
        icon="analytics",
        title="Building Your Profile",
        description=(
            f"{len(ctx.entries)} days tracked! Every entry improves accuracy. "
            f"At {RECENT_WINDOW} days, we'll reveal hidden connections in your recovery."
        ),
        priority=5,
        category=InsightCategory.trend,
    )]


RULES: tuple[Rule, ...] = (
    craving_trend,
    correlations,
    top_pattern,
    challenging_streak,
    consistency,
)

FALLBACKS: tuple[Fallback, ...] = (
    starter_stats,
    building_profile,
)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def synthesize_insights(ctx: InsightContext) -> list[Insight]:
    found: list[Insight] = []
    for rule in RULES:
        found.extend(rule(ctx))
    for fallback in FALLBACKS:
        found.extend(fallback(ctx, found))

    found.sort(key=lambda i: i.priority, reverse=True)
    cap = policy_for(ctx.data_quality).insight_cap
    logger.debug("synthesized %d insights, keeping %d", len(found), min(len(found), cap))
    return found[:cap]
