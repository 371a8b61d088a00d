"""Main orchestrator for running analyzers."""

import asyncio
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from ..analysis.collector import RecommendationCollector
from ..analysis.summary import tally_by_area
from ..analyzers.base import BaseAnalyzer
from ..models.data_models import AnalysisRunResult, AnalyzerOutcome, Priority
from ..utils.config import Config
from ..utils.errors import AnalyzerFailure
from ..utils.logging import get_logger
from .coordinator import ParallelRunner


ProgressCallback = Callable[[int, int], None]
DisplayCallback = Callable[[str], None]
AnalyzerFactory = Callable[[], Tuple[RecommendationCollector, Dict[str, BaseAnalyzer]]]

DEFAULT_WATCH_INTERVAL = 5.0


def display_name(key: str) -> str:
    """Timing label for an analyzer key: ``api-security`` -> ``Apisecurity``."""
    name = key.replace("-", "").replace("_", "")
    return name[:1].upper() + name[1:]


def slowest(timings: Dict[str, float], limit: int = 3) -> List[Tuple[str, float]]:
    """Slowest analyzers first."""
    return sorted(timings.items(), key=lambda item: item[1], reverse=True)[:limit]


class AnalysisOrchestrator:
    """Runs a prepared analyzer set in sync, async or watch mode."""
    
    def __init__(self, config: Optional[Config] = None):
        """Initialize orchestrator.
        
        Args:
            config: Configuration instance
        """
        self.config = config or Config()
        self.logger = get_logger("orchestrator")
        self.runner = ParallelRunner(self.config.process_limit)
    
    @staticmethod
    def _collector_of(analyzers: Dict[str, BaseAnalyzer]) -> RecommendationCollector:
        for analyzer in analyzers.values():
            return analyzer.collector
        return RecommendationCollector()
    
    def run_sync(
        self,
        analyzers: Dict[str, BaseAnalyzer],
        progress: Optional[ProgressCallback] = None,
        collector: Optional[RecommendationCollector] = None
    ) -> AnalysisRunResult:
        """Run analyzers one after another in the given order.
        
        Each analyzer is timed individually. A failing analyzer is logged,
        recorded as a failed outcome and skipped.
        
        Args:
            analyzers: Ordered mapping of key to analyzer
            progress: Called with ``(completed, total)`` after each analyzer
            collector: Collector shared by the analyzers, taken from them if omitted
            
        Returns:
            Run result with per-analyzer timings in milliseconds
        """
        if collector is None:
            collector = self._collector_of(analyzers)
        total = len(analyzers)
        timings: Dict[str, float] = {}
        outcomes: List[AnalyzerOutcome] = []
        
        run_start = time.perf_counter()
        
        for done, (key, analyzer) in enumerate(analyzers.items(), 1):
            before = len(collector)
            start = time.perf_counter()
            
            try:
                analyzer.analyze()
                elapsed_ms = (time.perf_counter() - start) * 1000
                timings[display_name(key)] = elapsed_ms
                outcomes.append(AnalyzerOutcome(
                    key=key,
                    name=analyzer.name,
                    elapsed_ms=elapsed_ms,
                    recommendations_added=len(collector) - before
                ))
                self.logger.debug(f"{key} finished in {elapsed_ms:.1f}ms")
            except Exception as e:
                failure = AnalyzerFailure(key, e)
                self.logger.error(str(failure), exc_info=True)
                outcomes.append(AnalyzerOutcome(
                    key=key, name=analyzer.name, status="failed", error=str(e)
                ))
            
            if progress:
                progress(done, total)
        
        total_ms = (time.perf_counter() - run_start) * 1000
        self.logger.info(f"Sync run of {total} analyzers took {total_ms:.1f}ms")
        
        return AnalysisRunResult(
            mode="sync",
            recommendations=collector.get_recommendations(),
            outcomes=outcomes,
            timings=timings,
            total_ms=total_ms,
            executed=total,
            available=total
        )
    
    async def run_async_batch(
        self,
        analyzers: Dict[str, BaseAnalyzer],
        collector: Optional[RecommendationCollector] = None
    ) -> AnalysisRunResult:
        """Run analyzers concurrently and wait for all of them.
        
        No per-analyzer timings are recorded in this mode; only the
        duration of the whole batch is measured.
        """
        if collector is None:
            collector = self._collector_of(analyzers)
        
        start = time.perf_counter()
        outcomes = await self.runner.run(analyzers)
        total_ms = (time.perf_counter() - start) * 1000
        
        self.logger.info(f"Async run of {len(analyzers)} analyzers took {total_ms:.1f}ms")
        
        return AnalysisRunResult(
            mode="async",
            recommendations=collector.get_recommendations(),
            outcomes=outcomes,
            timings={},
            total_ms=total_ms,
            executed=len(analyzers),
            available=len(analyzers)
        )
    
    def run_async(
        self,
        analyzers: Dict[str, BaseAnalyzer],
        collector: Optional[RecommendationCollector] = None
    ) -> AnalysisRunResult:
        """Blocking wrapper around :meth:`run_async_batch`."""
        return asyncio.run(self.run_async_batch(analyzers, collector))
    
    def watch(
        self,
        factory: AnalyzerFactory,
        interval: float = DEFAULT_WATCH_INTERVAL,
        display: Optional[DisplayCallback] = None,
        stop_event: Optional[threading.Event] = None,
        iterations: Optional[int] = None
    ) -> int:
        """Re-run the analyzers every ``interval`` seconds.
        
        Every tick starts from a fresh collector and analyzer set, so no
        findings carry over between ticks.
        
        Args:
            factory: Returns ``(collector, analyzers)`` for one tick
            interval: Seconds between ticks
            display: Receives formatted lines
            stop_event: Ends the loop when set
            iterations: Stop after this many ticks
            
        Returns:
            Number of completed ticks
        """
        display = display or self.logger.info
        stop_event = stop_event or threading.Event()
        completed = 0
        
        while not stop_event.is_set():
            collector, analyzers = factory()
            result = self.run_sync(analyzers, collector=collector)
            
            for outcome in result.failed_outcomes:
                display(f"Error in {display_name(outcome.key)}: {outcome.error}")
            
            display(f"[{time.strftime('%H:%M:%S')}] {len(result.recommendations)} recommendations")
            for line in self.format_tally(result):
                display(line)
            
            completed += 1
            if iterations is not None and completed >= iterations:
                break
            
            stop_event.wait(interval)
        
        self.logger.info(f"Watch mode stopped after {completed} iterations")
        return completed
    
    @staticmethod
    def format_tally(result: AnalysisRunResult) -> List[str]:
        """One ``area: High n | Medium n | Low n`` line per area."""
        lines = []
        for area, counts in sorted(tally_by_area(result.recommendations).items()):
            lines.append(
                f"  {area}: "
                f"High {counts.get(Priority.HIGH, 0)} | "
                f"Medium {counts.get(Priority.MEDIUM, 0)} | "
                f"Low {counts.get(Priority.LOW, 0)}"
            )
        return lines
