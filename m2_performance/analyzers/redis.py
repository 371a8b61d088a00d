"""Redis session and cache backend tuning."""

from ..models.data_models import Priority
from ..utils.validation import is_port_open
from .base import BaseAnalyzer, ModeAware


class RedisAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "redis"
    
    def analyze(self) -> None:
        if not self.snapshot.deployment:
            return
        self.analyze_session()
        self.analyze_cache()
    
    def analyze_session(self):
        session = self.deployment_value("session/redis", {}) or {}
        if not session:
            self.recommend(
                "Configure Redis for session storage",
                Priority.HIGH,
                "Redis session storage is not configured. This significantly improves session handling performance."
            )
            return
        
        if str(session.get("disable_locking", "")) != "1":
            self.recommend(
                "Disable Redis session locking",
                Priority.HIGH,
                "Session locking blocks concurrent requests. Set disable_locking=1 for a major performance improvement."
            )
        
        compression = str(session.get("compression_lib", "none"))
        if compression == "none":
            self.recommend(
                "Enable Redis session compression",
                Priority.MEDIUM,
                "Session compression is disabled. Use lz4 for best performance: compression_lib=lz4"
            )
        elif compression == "gzip":
            self.recommend(
                "Switch to LZ4 compression",
                Priority.LOW,
                "Currently using gzip compression. LZ4 is faster: compression_lib=lz4"
            )
        
        timeout = session.get("timeout")
        if timeout is not None and float(timeout) < 2.5:
            self.recommend(
                "Increase Redis timeout",
                Priority.MEDIUM,
                f"Redis timeout is too low: {timeout}s. Set to at least 2.5s"
            )
        
        if "persistent_identifier" not in session:
            self.recommend(
                "Enable Redis persistent connections",
                Priority.MEDIUM,
                "Persistent connections reduce connection overhead. Add persistent_identifier parameter."
            )
        
        if int(session.get("max_concurrency", 0) or 0) < 6:
            self.recommend(
                "Increase Redis max_concurrency",
                Priority.LOW,
                "Set max_concurrency to at least 6 for better concurrent request handling"
            )
    
    def analyze_cache(self):
        frontends = self.deployment_value("cache/frontend", {}) or {}
        for name, frontend in frontends.items():
            if not isinstance(frontend, dict) or "redis" not in str(frontend.get("backend", "")).lower():
                continue
            
            options = frontend.get("backend_options") or {}
            host = options.get("server", "127.0.0.1")
            port = options.get("port", 6379)
            
            # Unix sockets cannot be probed over TCP
            if str(host).startswith("/"):
                continue
            
            if not is_port_open(host, port):
                self.recommend(
                    f"Redis cache backend '{name}' unreachable",
                    Priority.HIGH,
                    f"Could not connect to Redis at {host}:{port}. Magento falls back to slow cache misses.",
                    metadata={"frontend": name, "host": host, "port": port}
                )
