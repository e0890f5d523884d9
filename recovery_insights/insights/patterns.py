"""
Pattern calculator.

Every factor is a binary split of the recent window: days where the
behaviour happened vs days where it definitely did not. Days where either
the behaviour or the outcome was not recorded drop out of both groups.
When the "better" group outperforms the other, a Pattern is emitted with

  impact     : percentage-point delta for rates, relative % for averages
  confidence : step function of how many days took part in the comparison

Factors
-------
  Good sleep quality        sleep yes/no        -> craving rate
  Regular exercise          exercised yes/no    -> average energy
  Physical activity         exercised yes/no    -> positive-mood rate
  7-9 hours of sleep        7-9h vs <6h / >9h   -> average energy     (good+)
  Complete morning routine  all three vs none   -> craving rate       (excellent)
  High stress days          stress yes/no       -> craving rate       (challenging)
  Limited social support    support no/yes      -> positive-mood rate (challenging)

A factor whose groups are too small, or whose outcome doesn't favour the
better group, contributes nothing.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from recovery_insights.insights.entries import JournalEntry, TriState, counter, scale
from recovery_insights.insights.numeric import (
    average,
    confidence_for,
    points,
    rate,
    relative_percent,
)
from recovery_insights.insights.tiers import RECENT_WINDOW, DataQuality, policy_for

logger = logging.getLogger(__name__)

# Minimum magnitude change (points) between windows before a trend is called.
TREND_THRESHOLD = 5
# Exercise must lift the positive-mood rate by more than this to count.
MOOD_MARGIN = 0.1

SHORT_SLEEP_HOURS = 6
OPTIMAL_SLEEP_HOURS = (7, 9)
LONG_SLEEP_HOURS = 9
MIN_OPTIMAL_SLEEP_DAYS = 5
MIN_ROUTINE_DAYS = 5


class PatternDirection(str, enum.Enum):
    positive = "positive"
    challenging = "challenging"


class PatternTrend(str, enum.Enum):
    improving = "improving"
    declining = "declining"
    stable = "stable"


@dataclass
class Pattern:
    direction: PatternDirection
    factor: str
    impact: int        # >= 0 for positive, <= 0 for challenging
    description: str
    confidence: int    # 0-100
    trend: Optional[PatternTrend] = None

    @property
    def score(self) -> int:
        return self.impact * self.confidence


@dataclass
class PatternSet:
    positive: list[Pattern] = field(default_factory=list)
    challenging: list[Pattern] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Binary split
# ---------------------------------------------------------------------------

Keep = Callable[[JournalEntry], bool]


def split(
    entries: Sequence[JournalEntry],
    factor: str,
    keep: Optional[Keep] = None,
) -> tuple[list[JournalEntry], list[JournalEntry]]:
    """Return (yes-days, no-days) for a tri-state field, dropping unset days."""
    yes: list[JournalEntry] = []
    no: list[JournalEntry] = []
    for entry in entries:
        state = getattr(entry, factor)
        if not state.recorded:
            continue
        if keep is not None and not keep(entry):
            continue
        (yes if state is TriState.yes else no).append(entry)
    return yes, no


def _answered(name: str) -> Keep:
    return lambda e: getattr(e, name).recorded


def _scored(name: str) -> Keep:
    return lambda e: scale(e, name) is not None


def _craving_rate(days: Sequence[JournalEntry]) -> Optional[float]:
    return rate(e.had_cravings for e in days)


def _mood_rate(days: Sequence[JournalEntry]) -> Optional[float]:
    return rate(e.mood_positive for e in days)


def _energy(days: Sequence[JournalEntry]) -> Optional[float]:
    return average(scale(e, "energy_level") for e in days)


# ---------------------------------------------------------------------------
# Factor evaluators
# ---------------------------------------------------------------------------

def good_sleep_quality(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    good, poor = split(entries, "sleep_quality", _answered("had_cravings"))
    if len(good) < 1 or len(poor) < 1:
        return None
    good_rate, poor_rate = _craving_rate(good), _craving_rate(poor)
    if poor_rate <= good_rate:
        return None
    return Pattern(
        direction=PatternDirection.positive,
        factor="Good sleep quality",
        impact=points(poor_rate - good_rate),
        description="Reduces craving likelihood",
        confidence=confidence_for(len(good) + len(poor)),
    )


def regular_exercise(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    active, rest = split(entries, "exercised", _scored("energy_level"))
    if len(active) < 2 or len(rest) < 2:
        return None
    active_energy, rest_energy = _energy(active), _energy(rest)
    if active_energy <= rest_energy:
        return None
    impact = relative_percent(active_energy, rest_energy)
    if impact is None:
        return None
    return Pattern(
        direction=PatternDirection.positive,
        factor="Regular exercise",
        impact=impact,
        description="Boosts energy levels",
        confidence=confidence_for(len(active) + len(rest)),
    )


def physical_activity(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    active, rest = split(entries, "exercised", _answered("mood_positive"))
    if len(active) < 2 or len(rest) < 2:
        return None
    delta = _mood_rate(active) - _mood_rate(rest)
    if delta <= MOOD_MARGIN:
        return None
    return Pattern(
        direction=PatternDirection.positive,
        factor="Physical activity",
        impact=points(delta),
        description="Improves mood",
        confidence=confidence_for(len(active) + len(rest)),
    )


def _sleep_window(entry: JournalEntry) -> TriState:
    hours = counter(entry, "sleep_hours")
    if hours is None:
        return TriState.unset
    low, high = OPTIMAL_SLEEP_HOURS
    if low <= hours <= high:
        return TriState.yes
    if hours < SHORT_SLEEP_HOURS or hours > LONG_SLEEP_HOURS:
        return TriState.no
    # 6-7h sits in neither bucket
    return TriState.unset


def optimal_sleep_duration(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    optimal: list[JournalEntry] = []
    other: list[JournalEntry] = []
    for entry in entries:
        if scale(entry, "energy_level") is None:
            continue
        bucket = _sleep_window(entry)
        if bucket is TriState.yes:
            optimal.append(entry)
        elif bucket is TriState.no:
            other.append(entry)
    if len(optimal) < MIN_OPTIMAL_SLEEP_DAYS or not other:
        return None
    optimal_energy, other_energy = _energy(optimal), _energy(other)
    if optimal_energy <= other_energy:
        return None
    impact = relative_percent(optimal_energy, other_energy)
    if impact is None:
        return None
    return Pattern(
        direction=PatternDirection.positive,
        factor="7-9 hours of sleep",
        impact=impact,
        description="Optimal for recovery",
        confidence=confidence_for(len(optimal) + len(other)),
    )


def _routine(entry: JournalEntry) -> TriState:
    meditation = counter(entry, "meditation_minutes")
    if (
        entry.exercised is TriState.no
        or entry.sleep_quality is TriState.no
        or meditation == 0
    ):
        return TriState.no
    if (
        entry.exercised is TriState.yes
        and entry.sleep_quality is TriState.yes
        and meditation is not None
    ):
        return TriState.yes
    return TriState.unset


def morning_routine(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    routine: list[JournalEntry] = []
    other: list[JournalEntry] = []
    for entry in entries:
        if not entry.had_cravings.recorded:
            continue
        state = _routine(entry)
        if state is TriState.yes:
            routine.append(entry)
        elif state is TriState.no:
            other.append(entry)
    if len(routine) < MIN_ROUTINE_DAYS or not other:
        return None
    routine_rate, other_rate = _craving_rate(routine), _craving_rate(other)
    if routine_rate >= other_rate:
        return None
    return Pattern(
        direction=PatternDirection.positive,
        factor="Complete morning routine",
        impact=points(other_rate - routine_rate),
        description="Sleep + exercise + meditation combo",
        confidence=confidence_for(len(routine) + len(other)),
    )


def high_stress(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    stressed, calm = split(entries, "stress_high", _answered("had_cravings"))
    if len(stressed) < 2 or len(calm) < 1:
        return None
    stressed_rate, calm_rate = _craving_rate(stressed), _craving_rate(calm)
    if stressed_rate <= calm_rate:
        return None
    return Pattern(
        direction=PatternDirection.challenging,
        factor="High stress days",
        impact=-points(stressed_rate - calm_rate),
        description="Triggers multiple challenges",
        confidence=confidence_for(len(stressed) + len(calm)),
    )


def limited_social_support(entries: Sequence[JournalEntry]) -> Optional[Pattern]:
    supported, isolated = split(entries, "social_support", _answered("mood_positive"))
    if len(isolated) < 2 or len(supported) < 2:
        return None
    supported_rate, isolated_rate = _mood_rate(supported), _mood_rate(isolated)
    if supported_rate <= isolated_rate:
        return None
    return Pattern(
        direction=PatternDirection.challenging,
        factor="Limited social support",
        impact=-points(supported_rate - isolated_rate),
        description="Affects mood and recovery",
        confidence=confidence_for(len(isolated) + len(supported)),
    )


@dataclass(frozen=True)
class Factor:
    name: str
    evaluate: Callable[[Sequence[JournalEntry]], Optional[Pattern]]
    # TierPolicy flag that must be set for this factor to run
    gate: Optional[str] = None


FACTORS: tuple[Factor, ...] = (
    Factor("sleep_quality", good_sleep_quality),
    Factor("exercise_energy", regular_exercise),
    Factor("exercise_mood", physical_activity),
    Factor("sleep_window", optimal_sleep_duration, gate="sleep_window"),
    Factor("morning_routine", morning_routine, gate="morning_routine"),
    Factor("high_stress", high_stress),
    Factor("social_support", limited_social_support),
)


# ---------------------------------------------------------------------------
# Trend against the previous window
# ---------------------------------------------------------------------------

def _trend(current: Pattern, previous: Optional[Pattern]) -> Optional[PatternTrend]:
    if previous is None:
        return None
    change = abs(current.impact) - abs(previous.impact)
    if current.direction is PatternDirection.challenging:
        change = -change
    if change >= TREND_THRESHOLD:
        return PatternTrend.improving
    if change <= -TREND_THRESHOLD:
        return PatternTrend.declining
    return PatternTrend.stable


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def calculate_patterns(
    recent: Sequence[JournalEntry],
    history: Sequence[JournalEntry],
    data_quality: DataQuality,
) -> PatternSet:
    """Evaluate every eligible factor on `recent`, then rank and cap per tier."""
    policy = policy_for(data_quality)
    previous: Sequence[JournalEntry] = ()
    if len(history) >= 2 * RECENT_WINDOW:
        previous = history[-2 * RECENT_WINDOW:-RECENT_WINDOW]

    found = PatternSet()
    for factor in FACTORS:
        if factor.gate and not getattr(policy, factor.gate):
            continue
        pattern = factor.evaluate(recent)
        if pattern is None:
            logger.debug("factor %s: no pattern", factor.name)
            continue
        if previous:
            pattern.trend = _trend(pattern, factor.evaluate(previous))
        if pattern.direction is PatternDirection.positive:
            found.positive.append(pattern)
        else:
            found.challenging.append(pattern)

    found.positive.sort(key=lambda p: p.score, reverse=True)
    found.challenging.sort(key=lambda p: p.score)
    found.positive = found.positive[:policy.positive_cap]
    found.challenging = found.challenging[:policy.challenging_cap]
    return found
