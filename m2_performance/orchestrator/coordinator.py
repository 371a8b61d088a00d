"""Parallel analyzer execution."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List

from ..analyzers.base import BaseAnalyzer
from ..models.data_models import AnalyzerOutcome
from ..utils.errors import AnalyzerFailure
from ..utils.logging import get_logger


DEFAULT_PROCESS_LIMIT = 5


class ParallelRunner:
    """Runs analyzers concurrently against their shared collector.
    
    Analyzers are blocking (file reads, PHP subprocesses, socket probes), so
    each one runs on a worker thread. A semaphore bounds how many run at
    once and ``asyncio.gather`` is the barrier: when :meth:`run` returns,
    every analyzer has finished and the collector holds all findings.
    """
    
    def __init__(self, process_limit: int = DEFAULT_PROCESS_LIMIT):
        """Initialize runner.
        
        Args:
            process_limit: Maximum analyzers running at the same time
        """
        self.process_limit = max(1, int(process_limit))
        self.logger = get_logger("coordinator")
    
    async def run(self, analyzers: Dict[str, BaseAnalyzer]) -> List[AnalyzerOutcome]:
        """Execute all analyzers.
        
        Args:
            analyzers: Ordered mapping of key to analyzer
            
        Returns:
            One outcome per analyzer, in the order given
        """
        if not analyzers:
            return []
        
        self.logger.info(f"Running {len(analyzers)} analyzers, limit {self.process_limit}")
        
        loop = asyncio.get_running_loop()
        semaphore = asyncio.Semaphore(self.process_limit)
        
        with ThreadPoolExecutor(max_workers=self.process_limit) as executor:
            
            async def execute_single(key: str, analyzer: BaseAnalyzer) -> AnalyzerOutcome:
                async with semaphore:
                    try:
                        await loop.run_in_executor(executor, analyzer.analyze)
                        return AnalyzerOutcome(key=key, name=analyzer.name)
                    except Exception as e:
                        failure = AnalyzerFailure(key, e)
                        self.logger.error(str(failure), exc_info=True)
                        return AnalyzerOutcome(
                            key=key, name=analyzer.name, status="failed", error=str(e)
                        )
            
            outcomes = await asyncio.gather(
                *(execute_single(key, analyzer) for key, analyzer in analyzers.items())
            )
        
        failed = sum(1 for outcome in outcomes if outcome.failed)
        self.logger.info(f"Parallel run finished, {failed} failed")
        return list(outcomes)
