"""Small numeric helpers shared by the pattern calculator and synthesizer."""
from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from recovery_insights.insights.entries import TriState

# (upper bound exclusive, confidence); sample sizes at or above the last
# bound get CONFIDENCE_CEILING.
_CONFIDENCE_STEPS = ((5, 30), (10, 50), (20, 70), (50, 85))
CONFIDENCE_CEILING = 95


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def average(values: Iterable[Optional[float]]) -> Optional[float]:
    sample = [v for v in values if v is not None]
    if not sample:
        return None
    return sum(sample) / len(sample)


def rate(flags: Iterable[TriState]) -> Optional[float]:
    """Fraction of recorded flags that are `yes`. None when nothing is recorded."""
    recorded = [f for f in flags if f.recorded]
    if not recorded:
        return None
    return sum(1 for f in recorded if f is TriState.yes) / len(recorded)


def count(flags: Iterable[TriState], state: TriState) -> int:
    return sum(1 for f in flags if f is state)


def confidence_for(sample_size: int) -> int:
    for bound, confidence in _CONFIDENCE_STEPS:
        if sample_size < bound:
            return confidence
    return CONFIDENCE_CEILING


def points(delta: float) -> int:
    """A rate difference as rounded percentage points."""
    return round_half_up(delta * 100)


def relative_percent(better: float, baseline: float) -> Optional[int]:
    """Relative improvement of `better` over `baseline`, in rounded percent."""
    if baseline == 0:
        return None
    return round_half_up((better - baseline) / baseline * 100)


def tail(items: Sequence, n: int) -> list:
    """The last `n` items (all of them when there are fewer)."""
    return list(items[-n:]) if n > 0 else []
