"""Module enablement checks from app/etc/config.php."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


DISABLED_THRESHOLD = 5

# Modules that only belong on development machines
DEV_MODULES = (
    "Magento_Developer",
    "Magento_SampleData",
    "MagentoHackathon_MagentoDebugToolbar",
    "Mirasvit_Profiler",
)

# Default modules that are usually safe to disable on stores that do not use them
OPTIONAL_MODULES = (
    "Magento_GoogleAnalytics",
    "Magento_Swagger",
    "Magento_Version",
)


class ModulesAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "modules"
    
    def analyze(self) -> None:
        modules = self.snapshot.modules
        if not modules:
            return
        
        config_file = self.relative(self.root / "app" / "etc" / "config.php")
        disabled = sorted(name for name, enabled in modules.items() if not enabled)
        
        if len(disabled) > DISABLED_THRESHOLD:
            self.collector.add_with_files(
                self.area,
                "Remove disabled modules",
                Priority.HIGH,
                f"{len(disabled)} modules are disabled. Disabled modules are still autoloaded and compiled.",
                [config_file],
                "Disabled modules still cost DI compilation time and autoloader lookups. "
                "Remove them with composer or replace them in composer.json.",
                {"disabled_modules": disabled}
            )
        
        active_dev = [name for name in DEV_MODULES if modules.get(name)]
        if active_dev and not self.is_in_developer_mode():
            self.collector.add_with_files(
                self.area,
                "Disable development modules",
                Priority.MEDIUM,
                "Development-only modules are enabled: " + ", ".join(active_dev),
                [config_file],
                metadata={"modules": active_dev}
            )
        
        optional = [name for name in OPTIONAL_MODULES if modules.get(name)]
        if optional:
            self.recommend(
                "Review optional core modules",
                Priority.LOW,
                "Consider disabling unused modules: " + ", ".join(optional)
            )
        
        self.logger.debug(f"{len(modules)} modules, {len(disabled)} disabled")
