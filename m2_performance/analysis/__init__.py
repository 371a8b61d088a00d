"""Recommendation aggregation and scoring."""

from .collector import RecommendationCollector
from .scoring import ScoringEngine
from .summary import filter_by_priority, sort_by_priority, summarize, tally_by_area, export_rows

__all__ = [
    "RecommendationCollector",
    "ScoringEngine",
    "filter_by_priority",
    "sort_by_priority",
    "summarize",
    "tally_by_area",
    "export_rows",
]
