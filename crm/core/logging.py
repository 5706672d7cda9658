"""
Logging configuration for CRM.

Provides consistent log formatting across all modules.
"""

import logging
import sys
from typing import Dict, Optional

_loggers: Dict[str, logging.Logger] = {}


def _configured_level() -> int:
    from crm.core.config import CRM_SETTINGS

    try:
        name = CRM_SETTINGS.log_level
    except FileNotFoundError:
        return logging.WARNING
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for a module.

    Args:
        name: Logger name (e.g., 'crm.records', 'crm.customers')
        level: Logging level (default: ``logging.level`` from config.yaml)

    Returns:
        Configured logger
    """
    if name in _loggers:
        return _loggers[name]

    if level is None:
        level = _configured_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)

        formatter = logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _loggers[name] = logger
    return logger
