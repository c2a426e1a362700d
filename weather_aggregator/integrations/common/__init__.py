"""Common utilities for weather providers."""

from .client import BaseProvider, Provider
from .exceptions import (
    InvalidAPIKey,
    LocationNotFound,
    ProviderAPIError,
    ProviderNotConfigured,
)

__all__ = [
    "BaseProvider",
    "InvalidAPIKey",
    "LocationNotFound",
    "Provider",
    "ProviderAPIError",
    "ProviderNotConfigured",
]
