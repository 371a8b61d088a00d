"""PHP OPcache settings read through the PHP CLI."""

from ..models.data_models import Priority
from ..utils.php_cli import PhpCliError, run_php_json
from .base import BaseAnalyzer, ModeAware


OPCACHE_SNIPPET = (
    'echo json_encode(['
    '"loaded" => extension_loaded("Zend OPcache"),'
    '"enable" => ini_get("opcache.enable"),'
    '"memory_consumption" => ini_get("opcache.memory_consumption"),'
    '"max_accelerated_files" => ini_get("opcache.max_accelerated_files"),'
    '"validate_timestamps" => ini_get("opcache.validate_timestamps"),'
    '"interned_strings_buffer" => ini_get("opcache.interned_strings_buffer")'
    ']);'
)

MIN_MEMORY_MB = 512
MIN_ACCELERATED_FILES = 130000
MIN_INTERNED_STRINGS_MB = 20


class OpCacheAnalyzer(ModeAware, BaseAnalyzer):
    """Compares OPcache ini values with values suited to a Magento codebase.
    
    The CLI ini may differ from PHP-FPM's, so findings carry the caveat.
    """
    
    area = "opcache"
    
    def __init__(self, *args, php_binary: str = "php", **kwargs):
        super().__init__(*args, **kwargs)
        self.php_binary = php_binary
    
    def read_settings(self) -> dict:
        return run_php_json(OPCACHE_SNIPPET, php_binary=self.php_binary)
    
    def analyze(self) -> None:
        try:
            settings = self.read_settings()
        except PhpCliError as e:
            self.logger.warning(f"Cannot read OPcache settings: {e}")
            return
        
        if not settings.get("loaded"):
            self.recommend(
                "Install the OPcache extension",
                Priority.HIGH,
                "Zend OPcache is not loaded. Every request recompiles PHP scripts."
            )
            return
        
        if str(settings.get("enable")) not in ("1", "On", "on"):
            self.recommend(
                "Enable OPcache",
                Priority.HIGH,
                "opcache.enable is off. Every request recompiles PHP scripts."
            )
        
        memory = int(settings.get("memory_consumption") or 0)
        if memory < MIN_MEMORY_MB:
            self.recommend(
                "Increase OPcache memory",
                Priority.MEDIUM,
                f"opcache.memory_consumption is {memory}MB, recommended at least {MIN_MEMORY_MB}MB.",
                metadata={"current": memory, "recommended": MIN_MEMORY_MB}
            )
        
        max_files = int(settings.get("max_accelerated_files") or 0)
        if max_files < MIN_ACCELERATED_FILES:
            self.recommend(
                "Increase opcache.max_accelerated_files",
                Priority.MEDIUM,
                f"opcache.max_accelerated_files is {max_files}, recommended at least {MIN_ACCELERATED_FILES}.",
                "A Magento installation has well over 100k PHP files including generated code."
            )
        
        interned = int(settings.get("interned_strings_buffer") or 0)
        if interned < MIN_INTERNED_STRINGS_MB:
            self.recommend(
                "Increase opcache.interned_strings_buffer",
                Priority.LOW,
                f"opcache.interned_strings_buffer is {interned}MB, recommended {MIN_INTERNED_STRINGS_MB}MB or more."
            )
        
        validate = str(settings.get("validate_timestamps"))
        if validate in ("1", "On", "on") and not self.is_in_developer_mode():
            self.recommend(
                "Disable opcache.validate_timestamps",
                Priority.MEDIUM,
                "Timestamp validation stats every included file. Disable it in production and reset OPcache on deploy."
            )
