"""Cache type, full page cache backend and TTL checks."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


# Caches worth keeping enabled even while developing
DEV_CACHES = ("config", "db_ddl", "compiled_config", "eav")

FPC_BUILT_IN = "1"
FPC_VARNISH = "2"


class CacheAnalyzer(ModeAware, BaseAnalyzer):
    """Cache types and full page cache."""
    
    area = "caching"
    
    def analyze(self) -> None:
        if self.uses_fastly():
            self.recommend(
                "Fastly CDN detected - excellent choice",
                Priority.LOW,
                "Fastly provides edge caching with built-in Varnish. A separate Varnish setup is not needed."
            )
            self.check_ttl()
        elif self.is_in_developer_mode():
            self.recommend(
                "Varnish not required in development",
                Priority.LOW,
                "Full page caching is often disabled in development for immediate visibility of changes."
            )
        else:
            self.check_fpc_backend()
            self.check_ttl()
        
        self.check_cache_types()
    
    def uses_fastly(self) -> bool:
        require = self.snapshot.composer.get("require") or {}
        if any("fastly" in package.lower() for package in require):
            return True
        return bool(self.snapshot.modules.get("Fastly_Cdn"))
    
    def check_fpc_backend(self):
        backend = str(self.config_value("system/full_page_cache/caching_application", FPC_BUILT_IN))
        if backend != FPC_VARNISH:
            self.recommend(
                "Use Varnish for full page cache",
                Priority.HIGH,
                "The built-in full page cache stores pages in the Magento cache backend and still boots PHP.",
                "Varnish serves cached pages without touching PHP. Switch with: "
                "bin/magento config:set system/full_page_cache/caching_application 2"
            )
    
    def check_ttl(self):
        if self.is_in_developer_mode():
            return
        
        ttl = int(self.config_value("system/full_page_cache/ttl", 0) or 0)
        # 0 means cached until invalidated
        if 0 < ttl < 86400:
            self.recommend(
                "Increase Full Page Cache TTL",
                Priority.MEDIUM,
                f"Consider increasing FPC TTL to at least 86400 seconds (24 hours) or 0 for permanent. Current: {ttl}",
                "Magento invalidates cache on changes automatically, so a long TTL is safe. "
                "Set with: bin/magento config:set system/full_page_cache/ttl 86400"
            )
    
    def check_cache_types(self):
        cache_types = self.deployment_value("cache_types", {}) or {}
        if not cache_types:
            return
        
        disabled = [name for name, enabled in cache_types.items() if str(enabled) != "1"]
        
        if self.is_in_developer_mode():
            should_enable = [name for name in DEV_CACHES if name in disabled or name not in cache_types]
            if should_enable:
                self.recommend(
                    "Enable performance caches for development",
                    Priority.LOW,
                    "Recommended caches for development: " + ", ".join(should_enable),
                    "These caches speed up backend operations without affecting frontend work. "
                    "Enable with: bin/magento cache:enable " + " ".join(should_enable)
                )
            return
        
        if disabled:
            self.recommend(
                "Enable all cache types for production",
                Priority.HIGH,
                "Disabled caches detected: " + ", ".join(disabled) + ". All caches must be enabled in production.",
                "Each disabled cache type forces Magento to regenerate data on every request. "
                "Enable all with: bin/magento cache:enable",
                metadata={"disabled_cache_types": disabled}
            )
