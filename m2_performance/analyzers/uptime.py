"""Host uptime, load and memory pressure."""

import os
import time

import psutil

from ..models.data_models import Priority
from .base import BaseAnalyzer


MIN_UPTIME_SECONDS = 3600
LOAD_FACTOR = 0.8
MEMORY_HIGH_PERCENT = 90
MEMORY_MEDIUM_PERCENT = 80


class UptimeAnalyzer(BaseAnalyzer):
    """Host health does not depend on the Magento mode."""
    
    area = "system"
    
    def analyze(self) -> None:
        self.check_uptime()
        self.check_load()
        self.check_memory()
    
    def check_uptime(self):
        uptime = time.time() - psutil.boot_time()
        if uptime < MIN_UPTIME_SECONDS:
            self.recommend(
                "Recent server restart",
                Priority.HIGH,
                f"The host has been up for {int(uptime // 60)} minutes. Caches may still be warming up.",
                "Unexpected restarts usually point at memory exhaustion or a crashing service. "
                "Check the system journal and warm the full page cache after deploys.",
                metadata={"uptime_seconds": int(uptime)}
            )
    
    def check_load(self):
        cpus = psutil.cpu_count() or 1
        load_1, _, load_15 = psutil.getloadavg()
        if load_1 > cpus * LOAD_FACTOR:
            self.recommend(
                "High system load",
                Priority.HIGH,
                f"1 minute load average {load_1:.2f} on {cpus} CPUs.",
                metadata={"load_1": round(load_1, 2), "load_15": round(load_15, 2), "cpus": cpus}
            )
    
    def check_memory(self):
        memory = psutil.virtual_memory()
        if memory.percent > MEMORY_HIGH_PERCENT:
            priority = Priority.HIGH
        elif memory.percent > MEMORY_MEDIUM_PERCENT:
            priority = Priority.MEDIUM
        else:
            return
        
        self.recommend(
            "High memory usage",
            priority,
            f"Memory usage is at {memory.percent:.1f}% of {memory.total / (1024 ** 3):.1f}GB.",
            "Low free memory leaves little room for the filesystem cache and PHP-FPM workers.",
            metadata={"percent": memory.percent, "pid": os.getpid()}
        )
