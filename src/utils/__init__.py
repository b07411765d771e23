"""Utility functions and classes for the asset resolution engine."""

from .config import AppConfig, AssetEngineConfig, get_config, reload_config
from .exceptions import (
    AssetsError,
    ConfigurationError,
    ReferenceDataError,
    ServiceError,
)
from .logging_setup import setup_logging

__all__ = [
    "AppConfig",
    "AssetEngineConfig",
    "AssetsError",
    "ConfigurationError",
    "ReferenceDataError",
    "ServiceError",
    "get_config",
    "reload_config",
    "setup_logging",
]
