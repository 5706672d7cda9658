"""
Configuration management for CRM.

Loads config.yaml and provides type-safe access to settings.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Config file location: lives inside the crm package
_PACKAGE_DIR = Path(__file__).parent.parent.resolve()
CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

# Cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        reload: Force reload even if cached

    Returns:
        Configuration dictionary
    """
    global _config_cache

    if _config_cache is not None and not reload:
        return _config_cache

    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        _config_cache = yaml.safe_load(f) or {}

    return _config_cache


def get_config_value(*keys: str, default: Any = None) -> Any:
    """
    Get a nested config value safely.

    Args:
        *keys: Path of keys to traverse (e.g., 'customers', 'keep_token')
        default: Value to return if key not found

    Example:
        keep = get_config_value('customers', 'keep_token', default='---')
    """
    config = get_config()

    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default

    return config


class CRMSettings:
    """
    Centralized settings access for CRM.

    All values are loaded from config.yaml with sensible fallbacks.

    Usage:
        from crm.core.config import CRM_SETTINGS
        name = CRM_SETTINGS.restaurant_name
        cap = CRM_SETTINGS.category_capacity("renter")
    """

    def __init__(self):
        self._config = None

    def _ensure_config(self):
        if self._config is None:
            self._config = get_config()

    def _section(self, name: str) -> Dict[str, Any]:
        self._ensure_config()
        return self._config.get(name) or {}

    def _category(self, key: str) -> Dict[str, Any]:
        return (self._section("customers").get("categories") or {}).get(key) or {}

    @property
    def restaurant_name(self) -> str:
        return str(self._section("restaurant").get("name", "Quatro"))

    @property
    def keep_token(self) -> str:
        return str(self._section("customers").get("keep_token", "---"))

    @property
    def code_span(self) -> int:
        return int(self._section("customers").get("code_span", 1000))

    def category_base(self, key: str) -> int:
        defaults = {"regular": 1000, "renter": 2000}
        return int(self._category(key).get("code_base", defaults.get(key, 0)))

    def category_capacity(self, key: str) -> int:
        return int(self._category(key).get("capacity", 50))

    def category_label(self, key: str) -> str:
        return str(self._category(key).get("label", key.title()))

    @property
    def minimum_deposit(self) -> float:
        return float(self._section("renter").get("minimum_deposit", 3000.0))

    @property
    def minimum_balance(self) -> float:
        return float(self._section("renter").get("minimum_balance", -1000.0))

    @property
    def pesos_per_point(self) -> int:
        return int(self._section("loyalty").get("pesos_per_point", 10))

    @property
    def simulation_amounts(self) -> Dict[str, float]:
        sim = self._section("simulation")
        return {
            "regular_purchase": float(sim.get("regular_purchase", 75.0)),
            "renter_purchase": float(sim.get("renter_purchase", 85.0)),
            "renter_large_purchase": float(sim.get("renter_large_purchase", 4500.0)),
        }

    @property
    def log_level(self) -> str:
        return str(self._section("logging").get("level", "WARNING")).upper()

    @property
    def config_dir(self) -> Path:
        return _PACKAGE_DIR


# Singleton instance
CRM_SETTINGS = CRMSettings()
