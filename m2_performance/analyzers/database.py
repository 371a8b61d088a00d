"""Database connection and maintenance checks."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


# Tables that grow without bound unless cleaned by cron
LOG_TABLE_CONFIGS = {
    "system/cron/index/history_success_lifetime": ("Cron success history lifetime", 60 * 24),
    "system/cron/default/history_failure_lifetime": ("Cron failure history lifetime", 60 * 24 * 3),
}


class DatabaseAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "database"
    
    def analyze(self) -> None:
        connection = self.deployment_value("db/connection/default", {}) or {}
        if not connection:
            self.logger.debug("No default database connection in env.php")
            return
        
        self.check_profiler(connection)
        self.check_persistent_connection(connection)
        self.check_table_prefix(connection)
        self.check_cron_history()
    
    def check_profiler(self, connection):
        profiler = connection.get("profiler")
        enabled = profiler.get("enabled") if isinstance(profiler, dict) else profiler
        if str(enabled) in ("1", "true", "True"):
            self.recommend(
                "Disable database profiler",
                Priority.LOW if self.is_in_developer_mode() else Priority.HIGH,
                "The database profiler is enabled in env.php and records every query.",
                "Query profiling adds overhead to every request and grows memory usage with query count. "
                "Remove the 'profiler' key from db/connection/default in app/etc/env.php."
            )
    
    def check_persistent_connection(self, connection):
        if str(connection.get("persistent", "")) == "1":
            self.recommend(
                "Avoid persistent MySQL connections",
                Priority.MEDIUM,
                "Persistent connections can exhaust max_connections under PHP-FPM and hold stale sessions.",
                metadata={"host": connection.get("host")}
            )
    
    def check_table_prefix(self, connection):
        prefix = self.deployment_value("db/table_prefix", "")
        if prefix:
            self.recommend(
                "Table prefix in use",
                Priority.LOW,
                f"Database tables use the prefix '{prefix}'. Some third-party extensions handle prefixes poorly."
            )
    
    def check_cron_history(self):
        for path, (label, limit) in LOG_TABLE_CONFIGS.items():
            value = self.config_value(path)
            if value is None:
                continue
            try:
                minutes = int(value)
            except (TypeError, ValueError):
                continue
            if minutes > limit:
                self.recommend(
                    f"Reduce {label.lower()}",
                    Priority.LOW,
                    f"{label} is {minutes} minutes. Large cron_schedule tables slow down cron itself.",
                    f"Set with: bin/magento config:set {path} {limit}"
                )
