"""Custom exception hierarchy for EVE Asset Resolver.

The resolution engine itself never raises: missing reference data degrades to
placeholders. These exceptions are raised only at the boundaries around it.
"""

from __future__ import annotations


class AssetsError(Exception):
    """Base exception for all EVE Asset Resolver errors."""

    pass


class ConfigurationError(AssetsError):
    """Exception raised for configuration-related errors."""

    pass


class ReferenceDataError(AssetsError):
    """Exception raised when reference data written to the cache is malformed."""

    pass


class ServiceError(AssetsError):
    """Base exception for service layer errors."""

    pass
