from .engine import InsightsData, generate_insights
from .entries import EntryCollection, JournalEntry, TriState
from .patterns import Pattern, PatternDirection, PatternTrend
from .synthesizer import Insight, InsightCategory
from .tiers import DataQuality

__all__ = [
    "generate_insights",
    "InsightsData",
    "EntryCollection",
    "JournalEntry",
    "TriState",
    "Pattern",
    "PatternDirection",
    "PatternTrend",
    "Insight",
    "InsightCategory",
    "DataQuality",
]
