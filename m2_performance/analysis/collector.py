"""Shared sink for recommendations produced during one analysis run."""

import threading
from typing import Any, Dict, List, Optional, Sequence

from ..models.data_models import Priority, Recommendation


class RecommendationCollector:
    """Append-only, thread-safe collection of recommendations.
    
    One instance is created per run (per tick in watch mode) and injected
    into every analyzer. No de-duplication happens here: two analyzers
    reporting the same finding produce two entries.
    """
    
    def __init__(self):
        self._recommendations: List[Recommendation] = []
        self._lock = threading.Lock()
    
    def add(
        self,
        area: str,
        title: str,
        priority: Priority,
        details: str,
        explanation: Optional[str] = None,
        files: Optional[Sequence[str]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Recommendation:
        """Create a recommendation and append it.
        
        Args:
            area: Area tag, e.g. ``"caching"``
            title: Short message
            priority: Severity
            details: Free text details
            explanation: Optional long-form rationale
            files: Affected file paths
            metadata: Arbitrary structured data
            
        Returns:
            The stored recommendation
        """
        recommendation = Recommendation(
            area=area,
            title=title,
            priority=priority,
            details=details,
            explanation=explanation,
            files=tuple(files or ()),
            metadata=dict(metadata or {})
        )
        with self._lock:
            self._recommendations.append(recommendation)
        return recommendation
    
    def add_with_files(
        self,
        area: str,
        title: str,
        priority: Priority,
        details: str,
        files: Sequence[str],
        explanation: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Recommendation:
        """Append a recommendation carrying a list of affected files."""
        return self.add(area, title, priority, details, explanation, files, metadata)
    
    def get_recommendations(self) -> List[Recommendation]:
        """Snapshot of everything appended so far, in insertion order."""
        with self._lock:
            return list(self._recommendations)
    
    get_all = get_recommendations
    
    def by_area(self, area: str) -> List[Recommendation]:
        return [r for r in self.get_recommendations() if r.area == area]
    
    def by_priority(self, priority: Priority) -> List[Recommendation]:
        return [r for r in self.get_recommendations() if r.priority == priority]
    
    def clear(self):
        """Drop all entries. Only valid between runs."""
        with self._lock:
            self._recommendations = []
    
    def count(self) -> int:
        with self._lock:
            return len(self._recommendations)
    
    def __len__(self) -> int:
        return self.count()
