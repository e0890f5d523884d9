"""
Insights engine entry point.

generate_insights(entries, today) -> InsightsData

  normalize  -> order by date, count, tier
  gate       -> fewer than MIN_ENTRIES: empty result, no analysis
  patterns   -> positive / challenging patterns on the recent window
  synthesize -> prioritized insights from history + patterns

Pure: no I/O, nothing cached between calls. The only ambient input is the
current date (used for `last_updated`), which callers may pin via `today`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from recovery_insights.core.config import settings
from recovery_insights.insights.entries import EntryCollection
from recovery_insights.insights.normalizer import normalize
from recovery_insights.insights.patterns import Pattern, calculate_patterns
from recovery_insights.insights.synthesizer import (
    Insight,
    InsightContext,
    synthesize_insights,
)
from recovery_insights.insights.tiers import DataQuality

logger = logging.getLogger(__name__)


@dataclass
class InsightsData:
    entry_count: int
    last_updated: str
    data_quality: DataQuality
    positive_patterns: list[Pattern] = field(default_factory=list)
    challenging_patterns: list[Pattern] = field(default_factory=list)
    insights: list[Insight] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain strings, numbers and lists only."""
        return {
            "entry_count": self.entry_count,
            "last_updated": self.last_updated,
            "positive_patterns": [_pattern_dict(p) for p in self.positive_patterns],
            "challenging_patterns": [_pattern_dict(p) for p in self.challenging_patterns],
            "insights": [_insight_dict(i) for i in self.insights],
            "data_quality": self.data_quality.value,
        }


def _pattern_dict(p: Pattern) -> dict[str, Any]:
    return {
        "type": p.direction.value,
        "factor": p.factor,
        "impact": p.impact,
        "description": p.description,
        "confidence": p.confidence,
        "trend": p.trend.value if p.trend else None,
    }


def _insight_dict(i: Insight) -> dict[str, Any]:
    return {
        "icon": i.icon,
        "title": i.title,
        "description": i.description,
        "priority": i.priority,
        "category": i.category.value,
    }


def _today() -> date:
    return datetime.now(tz=ZoneInfo(settings.TIMEZONE)).date()


def generate_insights(
    entries: EntryCollection,
    today: Optional[date] = None,
) -> InsightsData:
    """Analyse a date-keyed collection of journal entries."""
    normalized = normalize(entries, today or _today())

    if not normalized.sufficient:
        logger.info("insights skipped: only %d entries", normalized.count)
        return InsightsData(
            entry_count=normalized.count,
            last_updated=normalized.last_updated,
            data_quality=DataQuality.limited,
        )

    patterns = calculate_patterns(
        normalized.recent, normalized.entries, normalized.data_quality
    )
    insights = synthesize_insights(InsightContext(
        entries=normalized.entries,
        recent=normalized.recent,
        patterns=patterns,
        data_quality=normalized.data_quality,
    ))

    logger.info(
        "insights generated: entries=%d quality=%s positive=%d challenging=%d insights=%d",
        normalized.count,
        normalized.data_quality.value,
        len(patterns.positive),
        len(patterns.challenging),
        len(insights),
    )
    return InsightsData(
        entry_count=normalized.count,
        last_updated=normalized.last_updated,
        data_quality=normalized.data_quality,
        positive_patterns=patterns.positive,
        challenging_patterns=patterns.challenging,
        insights=insights,
    )
