"""
Runtime Configuration Module

Provides configuration loading and management for hashtree.
"""

from .runtime import (
    ENV_PREFIX,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
