"""Varnish configuration and reachability."""

from ..models.data_models import Priority
from ..utils.validation import is_port_open
from .base import BaseAnalyzer, ModeAware


class VarnishPerformanceAnalyzer(ModeAware, BaseAnalyzer):
    """Checks env.php ``http_cache_hosts`` and probes the configured hosts."""
    
    area = "varnish"
    
    def analyze(self) -> None:
        if self.is_in_developer_mode():
            return
        
        hosts = self.deployment_value("http_cache_hosts", []) or []
        if not hosts:
            self.recommend(
                "Varnish not configured",
                Priority.HIGH,
                "Varnish configuration not found. For high-traffic sites, Varnish can improve performance by 10-100x.",
                "Varnish serves cached content from memory and bypasses PHP/MySQL, reducing TTFB from "
                "200-500ms to 10-50ms. Configure http_cache_hosts in env.php."
            )
            return
        
        unreachable = []
        for entry in hosts:
            host = entry.get("host", "127.0.0.1")
            port = entry.get("port", 80)
            if not is_port_open(host, port):
                unreachable.append(f"{host}:{port}")
        
        if unreachable:
            self.recommend(
                "Varnish host unreachable",
                Priority.HIGH,
                "Cache purge requests will fail for: " + ", ".join(unreachable),
                metadata={"unreachable_hosts": unreachable}
            )
        
        if str(self.config_value("system/full_page_cache/caching_application", "1")) != "2":
            self.recommend(
                "Varnish configured but not selected as FPC backend",
                Priority.MEDIUM,
                "http_cache_hosts is set but the full page cache still uses the built-in application.",
                "Set with: bin/magento config:set system/full_page_cache/caching_application 2"
            )
        
        grace = int(self.config_value("system/full_page_cache/varnish/grace_period", 0) or 0)
        if grace and grace < 300:
            self.recommend(
                "Increase Varnish grace period",
                Priority.LOW,
                f"Grace period is {grace}s. A longer grace period keeps serving stale pages while the backend recovers."
            )
