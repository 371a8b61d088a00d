"""Analyzer orchestration."""

from .main import AnalysisOrchestrator, display_name, slowest
from .coordinator import ParallelRunner
from .profiles import AnalyzerRegistry, Profile, AreaTag, resolve_areas

__all__ = [
    "AnalysisOrchestrator",
    "ParallelRunner",
    "AnalyzerRegistry",
    "Profile",
    "AreaTag",
    "resolve_areas",
    "display_name",
    "slowest",
]
