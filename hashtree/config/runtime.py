"""
Runtime Configuration

Configuration for the default hash algorithm and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from hashtree.schemas.errors import ConfigException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"


@dataclass
class RuntimeConfig:
    """
    Runtime configuration for hash tree construction and the CLI.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = "sha256"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hashlib algorithm name used when no hasher is given
        - HASHTREE_LOG_LEVEL: Log level
        - HASHTREE_LOG_FILE: Additional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigException(
                    message=f"Invalid YAML in config file: {e}",
                    path=str(path),
                ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(
                message="Config file must contain a mapping at the top level",
                path=str(path),
                details={"type": type(data).__name__},
            )

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        defaults = cls()
        return cls(
            hash_algorithm=data.get("hash_algorithm", defaults.hash_algorithm),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        Allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None re-reads the environment)."""
    global _default_config
    _default_config = config
