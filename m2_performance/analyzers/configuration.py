"""Core Magento configuration checks."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


class ConfigurationAnalyzer(ModeAware, BaseAnalyzer):
    """Deployment mode, async processing and storage backends."""
    
    area = "config"
    
    def analyze(self) -> None:
        self.check_production_mode()
        self.check_async_email_sending()
        self.check_async_grid_indexing()
        self.check_storage_backends()
        self.check_customer_segments()
    
    def check_production_mode(self):
        if self.magento_mode != "developer":
            return
        
        if self.dev_mode_aware:
            self.recommend(
                "Developer Mode - Analysis adjusted",
                Priority.LOW,
                "Running in Developer Mode with adjusted recommendations.",
                "Developer Mode generates code and static content on the fly and keeps some caches off. "
                "For production deployment, use: bin/magento deploy:mode:set production"
            )
        else:
            self.recommend(
                "Switch from developer mode to production mode",
                Priority.HIGH,
                "Developer mode significantly impacts performance and should not be used in production.",
                "Developer mode causes 5-10x slower page loads: no static content deployment, real-time "
                "compilation and verbose error logging. Switch with: bin/magento deploy:mode:set production "
                "or run with --allow-dev-mode if this is a development environment."
            )
    
    def check_async_email_sending(self):
        # Emails usually need to go out immediately while testing
        if self.is_in_developer_mode():
            return
        
        if str(self.config_value("sales_email/general/async_sending", "")) != "1":
            self.recommend(
                "Enable asynchronous sending of sales emails",
                Priority.MEDIUM,
                "Synchronous email sending during checkout can slow down the process.",
                "Async sending moves email delivery to cron, taking 1-3 seconds off checkout. "
                "Enable with: bin/magento config:set sales_email/general/async_sending 1"
            )
    
    def check_async_grid_indexing(self):
        if str(self.config_value("dev/grid/async_indexing", "")) != "1":
            self.recommend(
                "Enable asynchronous grid indexing",
                Priority.LOW if self.is_in_developer_mode() else Priority.MEDIUM,
                "Async grid indexing improves admin performance by deferring data indexing.",
                "Enable with: bin/magento config:set dev/grid/async_indexing 1"
            )
    
    def check_storage_backends(self):
        if not self.snapshot.deployment:
            return
        
        if self.deployment_value("session/save") == "files":
            self.recommend(
                "Use Redis for session storage",
                Priority.MEDIUM,
                "File-based session storage can be slow. Consider using Redis for better performance.",
                "File sessions cause an I/O bottleneck and don't scale across servers. Configure with: "
                "bin/magento setup:config:set --session-save=redis --session-save-redis-host=127.0.0.1"
            )
        
        frontends = self.deployment_value("cache/frontend", {}) or {}
        has_redis = any(
            "redis" in str(frontend.get("backend", "")).lower()
            for frontend in frontends.values() if isinstance(frontend, dict)
        )
        if not has_redis:
            self.recommend(
                "Configure Redis for cache storage",
                Priority.HIGH,
                "Using Redis for cache storage can significantly improve performance.",
                "Redis cache operations are 10-50x faster than file storage. Configure with: "
                "bin/magento setup:config:set --cache-backend=redis --cache-backend-redis-server=127.0.0.1"
            )
    
    def check_customer_segments(self):
        if not self.snapshot.is_enterprise:
            return
        
        if str(self.config_value("customer/magento_customersegment/real_time_validation", "")) == "1":
            self.recommend(
                "Disable real-time customer segment validation",
                Priority.MEDIUM,
                "Real-time validation can impact performance if you have many segments.",
                "Disable with: bin/magento config:set customer/magento_customersegment/real_time_validation 0"
            )
