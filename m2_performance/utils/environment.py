"""Load the analyzed store's configuration into an EnvironmentSnapshot."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pandas as pd

from ..models.data_models import EnvironmentSnapshot
from .errors import ConfigurationLoadError
from .logging import get_logger
from .php_cli import PhpCliError, run_php_json


logger = get_logger("environment")

ENTERPRISE_PACKAGES = (
    "magento/enterprise",
    "magento/product-enterprise-edition",
    "magento/module-customer-segment",
)

PHP_DUMP_SNIPPET = 'echo json_encode(include $argv[1]);'


def read_php_array(path: Path, php_binary: str = "php", timeout: int = 15) -> Dict[str, Any]:
    """Evaluate a PHP file returning an array and decode it.
    
    ``app/etc/env.php`` and ``app/etc/config.php`` are executable PHP, so the
    only faithful reader is PHP itself.
    
    Args:
        path: PHP file to include
        php_binary: PHP CLI executable
        timeout: Seconds before the PHP process is abandoned
        
    Returns:
        Decoded array, empty when the file does not exist
    """
    path = Path(path)
    if not path.exists():
        return {}
    
    try:
        data = run_php_json(PHP_DUMP_SNIPPET, str(path), php_binary=php_binary, timeout=timeout)
    except PhpCliError as e:
        raise ConfigurationLoadError(f"Cannot read {path}: {e}") from e
    
    # json_encode turns an empty PHP array into []
    return data if isinstance(data, dict) else {}


def flatten_config(tree: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested config sections into ``section/group/field`` paths."""
    flat: Dict[str, Any] = {}
    for key, value in tree.items():
        path = f"{prefix}/{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten_config(value, path))
        else:
            flat[path] = value
    return flat


def load_core_config_export(
    csv_path: str,
    website_id: Optional[int] = None,
    store_id: Optional[int] = None
) -> Dict[str, Any]:
    """Read a ``core_config_data`` table export as the database layer.
    
    Scopes are applied default -> websites -> stores so narrower scopes win.
    
    Args:
        csv_path: CSV export with ``scope``, ``scope_id``, ``path`` and ``value`` columns
        website_id: Website scope to overlay
        store_id: Store view scope to overlay
        
    Returns:
        Flattened path -> value mapping
    """
    path = Path(csv_path)
    if not path.exists():
        raise ConfigurationLoadError(f"core_config_data export not found: {csv_path}")
    
    try:
        frame = pd.read_csv(path, dtype={"value": str}, keep_default_na=False)
    except Exception as e:
        raise ConfigurationLoadError(f"Failed to read core_config_data export: {e}") from e
    
    missing = {"scope", "scope_id", "path", "value"} - set(frame.columns)
    if missing:
        raise ConfigurationLoadError(
            f"core_config_data export is missing columns: {', '.join(sorted(missing))}"
        )
    
    scopes = [("default", 0)]
    if website_id is not None:
        scopes.append(("websites", website_id))
    if store_id is not None:
        scopes.append(("stores", store_id))
    
    config: Dict[str, Any] = {}
    for scope, scope_id in scopes:
        rows = frame[(frame["scope"] == scope) & (frame["scope_id"].astype(int) == scope_id)]
        for _, row in rows.iterrows():
            config[row["path"]] = row["value"]
    
    logger.info(f"Loaded {len(config)} config values from {csv_path}")
    return config


class EnvironmentLoader:
    """Builds the configuration snapshot every analyzer is constructed with.
    
    Core config precedence, highest first: database, ``app/etc/config.php``,
    ``app/etc/env.php``, ``MAGENTO_*`` environment variables.
    """
    
    def __init__(
        self,
        root: str,
        database_config: Optional[Mapping[str, Any]] = None,
        php_reader=read_php_array
    ):
        """Initialize loader.
        
        Args:
            root: Magento root directory
            database_config: Flattened ``core_config_data`` values, if available
            php_reader: Callable turning a PHP array file into a dict
        """
        self.root = Path(root).expanduser().resolve()
        self.database_config = dict(database_config or {})
        self.php_reader = php_reader
        self.logger = get_logger("environment")
    
    @property
    def env_php(self) -> Path:
        return self.root / "app" / "etc" / "env.php"
    
    @property
    def config_php(self) -> Path:
        return self.root / "app" / "etc" / "config.php"
    
    def load(self) -> EnvironmentSnapshot:
        """Read every configuration source.
        
        Raises:
            ConfigurationLoadError: if a present source cannot be read
        """
        deployment = self.php_reader(self.env_php)
        app_config = self.php_reader(self.config_php)
        composer = self._load_composer()
        
        config = self._merge_layers(deployment, app_config)
        
        snapshot = EnvironmentSnapshot(
            root=str(self.root),
            config=config,
            deployment=deployment,
            env_overrides={
                name: value for name, value in os.environ.items()
                if name.startswith("MAGENTO_")
            },
            modules={k: int(v) for k, v in (app_config.get("modules") or {}).items()},
            composer=composer,
            is_enterprise=self._detect_enterprise(composer),
            mode=self._detect_mode(deployment)
        )
        
        self.logger.info(
            f"Loaded {len(config)} config values from {self.root} "
            f"(mode={snapshot.mode}, enterprise={snapshot.is_enterprise})"
        )
        return snapshot
    
    def _merge_layers(self, deployment: Dict[str, Any], app_config: Dict[str, Any]) -> Dict[str, Any]:
        config = flatten_config(self._system_default(deployment))
        config.update(flatten_config(self._system_default(app_config)))
        config.update(self.database_config)
        return config

    @staticmethod
    def _system_default(tree: Dict[str, Any]) -> Dict[str, Any]:
        system = tree.get("system")
        if not isinstance(system, dict):
            return {}
        return system.get("default") or {}
    
    def _load_composer(self) -> Dict[str, Any]:
        composer_path = self.root / "composer.json"
        if not composer_path.exists():
            return {}
        try:
            with open(composer_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Ignoring unreadable composer.json: {e}")
            return {}
    
    @staticmethod
    def _detect_enterprise(composer: Dict[str, Any]) -> bool:
        for package in (composer.get("require") or {}):
            if any(marker in package.lower() for marker in ENTERPRISE_PACKAGES):
                return True
        return False
    
    @staticmethod
    def _detect_mode(deployment: Dict[str, Any]) -> str:
        return os.getenv("MAGE_MODE") or deployment.get("MAGE_MODE") or "default"
