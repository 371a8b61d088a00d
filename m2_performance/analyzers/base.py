"""Base class and optional capabilities for all analyzers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from ..analysis.collector import RecommendationCollector
from ..models.data_models import EnvironmentSnapshot, Priority, Recommendation
from ..utils.logging import get_logger


class BaseAnalyzer(ABC):
    """Abstract base class for all analyzers.
    
    An analyzer inspects one facet of the environment and appends findings
    to the collector it was constructed with. ``analyze`` returns nothing;
    exceptions escaping it are isolated by the orchestrator.
    """
    
    #: Default area tag for findings
    area: str = "general"
    
    def __init__(
        self,
        root: str,
        snapshot: EnvironmentSnapshot,
        collector: RecommendationCollector,
        name: Optional[str] = None
    ):
        """Initialize base analyzer.
        
        Args:
            root: Magento root directory
            snapshot: Loaded configuration snapshot
            collector: Shared recommendation sink
            name: Analyzer name for logging
        """
        self.root = Path(root)
        self.snapshot = snapshot
        self.collector = collector
        self.name = name or self.__class__.__name__
        self.logger = get_logger(f"analyzers.{self.name}")
    
    @abstractmethod
    def analyze(self) -> None:
        """Inspect the environment and append recommendations."""
        pass
    
    def recommend(
        self,
        title: str,
        priority: Priority,
        details: str,
        explanation: Optional[str] = None,
        files: Optional[Sequence[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        area: Optional[str] = None
    ) -> Recommendation:
        """Append a finding under this analyzer's area."""
        return self.collector.add(
            area or self.area, title, priority, details, explanation, files, metadata
        )
    
    def config_value(self, path: str, default: Any = None) -> Any:
        return self.snapshot.config_value(path, default)
    
    def deployment_value(self, path: str, default: Any = None) -> Any:
        return self.snapshot.deployment_value(path, default)
    
    def relative(self, path: Path) -> str:
        """Path relative to the Magento root for display."""
        try:
            return str(Path(path).relative_to(self.root))
        except ValueError:
            return str(path)


class ModeAware:
    """Capability for analyzers that adapt findings to the Magento mode.
    
    Checked with ``isinstance`` by the registry before a run.
    """
    
    dev_mode_aware: bool = False
    magento_mode: str = "default"
    
    def set_dev_mode_aware(self, aware: bool):
        self.dev_mode_aware = aware
    
    def set_magento_mode(self, mode: str):
        self.magento_mode = mode or "default"
    
    def is_in_developer_mode(self) -> bool:
        """Developer mode that the user acknowledged."""
        return self.magento_mode == "developer" and self.dev_mode_aware
