"""Centralized configuration management for EVE Asset Resolver.

This module provides application-level configuration from environment variables.

Features:
- Environment variable support via .env files
- Fallback priority: .env → hardcoded defaults
- Type-safe configuration using Pydantic
- Singleton pattern for global access

Usage:
    from utils.config import get_config

    threshold = get_config().assets.structure_id_threshold
"""

from __future__ import annotations

import threading
import tomllib
from logging import getLogger
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.exceptions import ConfigurationError

logger = getLogger(__name__)


def _read_pyproject() -> dict:
    """Read pyproject.toml and extract project metadata."""
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            project = tomllib.load(f).get("project", {})
            return {
                "name": project.get("name", "eve-asset-resolver"),
                "version": project.get("version", "?.?.?"),
            }
    except Exception as e:
        # Fallback to defaults if pyproject.toml can't be read
        logger.warning(f"Could not read pyproject.toml: {e}")
        return {"name": "eve-asset-resolver", "version": "?.?.?"}


# Read project metadata once at module load
_PROJECT_METADATA = _read_pyproject()


class AssetEngineConfig(BaseSettings):
    """Asset resolution and tree aggregation configuration."""

    structure_id_threshold: int = Field(
        default=1_000_000_000_000,
        description="Location IDs at or above this value are player structures",
        ge=1,
    )
    max_parent_depth: int = Field(
        default=64,
        description="Maximum container hops followed when walking a parent chain",
        ge=1,
    )
    include_buy_orders: bool = Field(
        default=False,
        description="Emit synthetic records for buy orders (flag BuyOrder)",
    )
    active_ship_scopes: list[str] = Field(
        default=[
            "esi-location.read_location.v1",
            "esi-location.read_ship_type.v1",
        ],
        description="Scopes an owner needs before the active ship can be detected",
    )
    unknown_region_name: str = Field(
        default="Unknown Region",
        description="Region name used when a location has no resolvable region",
    )

    model_config = SettingsConfigDict(
        env_prefix="ASSETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("active_ship_scopes")
    @classmethod
    def validate_scopes(cls, v: list[str]) -> list[str]:
        """Reject blank scope names."""
        for scope in v:
            if not scope or not scope.strip():
                raise ValueError("active_ship_scopes must not contain blank entries")
        return v


class AppConfig(BaseSettings):
    """Application-wide configuration."""

    name: str = Field(
        default_factory=lambda: _PROJECT_METADATA["name"],
        description="Application name (from pyproject.toml)",
    )
    version: str = Field(
        default_factory=lambda: _PROJECT_METADATA["version"],
        description="Application version (from pyproject.toml)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


class Config:
    """Main configuration container."""

    def __init__(self) -> None:
        """Initialize configuration from environment and defaults.

        Raises:
            ConfigurationError: If an environment override fails validation
        """
        try:
            self.app = AppConfig()
            self.assets = AssetEngineConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(\n  app={self.app},\n  assets={self.assets}\n)"


# Global configuration instance (singleton)
_config_instance: Config | None = None
_config_lock = threading.Lock()


def get_config(config: Config | None = None) -> Config:
    """Get the global configuration instance (lazy initialization).

    Args:
        config: Optional config instance to use instead of singleton.
                If provided, replaces the singleton.

    Returns:
        Global Config instance
    """
    global _config_instance  # noqa: PLW0603

    if config is not None:
        with _config_lock:
            _config_instance = config
        return _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = Config()

    assert _config_instance is not None
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment.

    Returns:
        Reloaded Config instance
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global config instance.

    Primarily for testing.
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = None
