"""
CRM Core - Shared services for all modules.

Usage:
    from crm.core import get_config, get_logger, CRM_SETTINGS
"""

from crm.core.config import get_config, get_config_value, CRM_SETTINGS
from crm.core.logging import get_logger

__all__ = [
    "get_config",
    "get_config_value",
    "CRM_SETTINGS",
    "get_logger",
]
