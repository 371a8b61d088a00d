"""Utility modules."""

from .config import Config
from .logging import setup_logging, get_logger
from .errors import M2PerformanceError, ConfigurationLoadError, AnalyzerFailure
from .environment import EnvironmentLoader, read_php_array, load_core_config_export
from .validation import validate_magento_root, is_port_open

__all__ = [
    "Config",
    "setup_logging",
    "get_logger",
    "M2PerformanceError",
    "ConfigurationLoadError",
    "AnalyzerFailure",
    "EnvironmentLoader",
    "read_php_array",
    "load_core_config_export",
    "validate_magento_root",
    "is_port_open",
]
