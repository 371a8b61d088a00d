"""
Magento 2 Performance Analyzer

Runs independent analyzers against a Magento 2 installation and turns their
findings into prioritized recommendations and a performance score.
"""

__version__ = "0.1.0"
__author__ = "M2 Performance Team"

from .orchestrator.main import AnalysisOrchestrator
from .orchestrator.profiles import AnalyzerRegistry, Profile
from .analysis.collector import RecommendationCollector
from .analysis.scoring import ScoringEngine
from .models.data_models import Recommendation, Priority, AnalysisRunResult

__all__ = [
    "AnalysisOrchestrator",
    "AnalyzerRegistry",
    "Profile",
    "RecommendationCollector",
    "ScoringEngine",
    "Recommendation",
    "Priority",
    "AnalysisRunResult",
]
