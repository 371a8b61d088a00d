"""Tool configuration management."""

import os
from typing import Any, Dict, Optional
from dotenv import load_dotenv


class Config:
    """Configuration manager for the analyzer tool itself.
    
    Values come from ``M2P_*`` environment variables, optionally seeded
    from a ``.env`` file. Settings of the analyzed store live in
    :class:`~m2_performance.models.data_models.EnvironmentSnapshot`, not here.
    """
    
    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration.
        
        Args:
            env_file: Path to .env file
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
        
        self._config: Dict[str, Any] = {}
        self._load_config()
    
    def _load_config(self):
        """Load configuration from environment variables."""
        # Logging
        self._config["log_level"] = os.getenv("M2P_LOG_LEVEL", "WARNING")
        self._config["log_file"] = os.getenv("M2P_LOG_FILE", "")
        
        # Execution
        self._config["process_limit"] = max(1, int(os.getenv("M2P_PROCESS_LIMIT", "5")))
        self._config["watch_interval"] = float(os.getenv("M2P_WATCH_INTERVAL", "5"))
        self._config["default_profile"] = os.getenv("M2P_PROFILE", "full")
        
        # Developer mode awareness
        self._config["allow_dev_mode"] = os.getenv(
            "M2P_ALLOW_DEV_MODE", "0"
        ).lower() in ("1", "true", "yes")
        
        # Dump loaded store configuration as a low priority finding
        self._config["debug_config"] = os.getenv("M2PERFORMANCE_DEBUG", "0") == "1"
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.
        
        Args:
            key: Configuration key
            default: Default value if key not found
            
        Returns:
            Configuration value
        """
        return self._config.get(key, default)
    
    def set(self, key: str, value: Any):
        """Set configuration value.
        
        Args:
            key: Configuration key
            value: Configuration value
        """
        self._config[key] = value
    
    @property
    def log_level(self) -> str:
        """Get log level."""
        return self._config["log_level"]
    
    @property
    def log_file(self) -> str:
        """Get log file path."""
        return self._config["log_file"]
    
    @property
    def process_limit(self) -> int:
        """Get maximum number of analyzers running in parallel."""
        return self._config["process_limit"]
    
    @property
    def watch_interval(self) -> float:
        """Get seconds between watch mode iterations."""
        return self._config["watch_interval"]
    
    @property
    def default_profile(self) -> str:
        """Get the profile used when none is given."""
        return self._config["default_profile"]
    
    @property
    def allow_dev_mode(self) -> bool:
        """Get developer mode awareness default."""
        return self._config["allow_dev_mode"]
    
    @property
    def debug_config(self) -> bool:
        """Whether the loaded store config is reported for debugging."""
        return self._config["debug_config"]
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self._config.copy()
