"""Common exception classes for weather providers."""


class ProviderAPIError(Exception):
    """Base exception for all provider API errors."""

    pass


class ProviderNotConfigured(ProviderAPIError):
    """The provider has no API key configured."""

    pass


class LocationNotFound(ProviderAPIError):
    """The upstream service does not know the requested location."""

    pass


class InvalidAPIKey(ProviderAPIError):
    """The upstream service rejected the configured API key."""

    pass
