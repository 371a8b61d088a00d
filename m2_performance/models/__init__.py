"""Data models."""

from .data_models import (
    Priority, Recommendation, AnalyzerOutcome, EnvironmentSnapshot,
    AnalysisRunResult, PerformanceScore, RecommendationSummary
)

__all__ = [
    "Priority",
    "Recommendation",
    "AnalyzerOutcome",
    "EnvironmentSnapshot",
    "AnalysisRunResult",
    "PerformanceScore",
    "RecommendationSummary",
]
