"""
Base weather provider.

Provides shared functionality for provider clients:
- httpx.AsyncClient lifecycle management
- Async context manager support
- Pydantic response decoding helpers
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, Self, TypeVar

import httpx
import pydantic
import structlog

from ...aggregator.types import Reading
from .exceptions import ProviderAPIError, ProviderNotConfigured

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 10.0

T = TypeVar("T", bound=pydantic.BaseModel)


class Provider(Protocol):
    """The capability every weather provider exposes to the aggregator."""

    name: str

    def is_available(self) -> bool: ...

    async def fetch(self, city: str, country: str) -> Reading: ...

    async def close(self) -> None: ...


class BaseProvider(ABC):
    """
    Base class for weather providers using httpx.

    Subclasses set `name` and implement `_fetch`, which is only called
    once the provider is known to have an API key.
    """

    name: str
    client: httpx.AsyncClient | None

    def __init__(
        self,
        *,
        api_key: str | None,
        language: str = "en",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.language = language
        self.timeout = timeout
        self.transport = transport
        self.client = None

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, city: str, country: str) -> Reading:
        """
        Fetch the current weather for a city from the upstream service.
        """
        if not self.is_available():
            raise ProviderNotConfigured(f"Provider {self.name} is not configured")

        return await self._fetch(city, country)

    @abstractmethod
    async def _fetch(self, city: str, country: str) -> Reading:
        """Call the upstream API and map the response to a Reading."""
        ...

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    ####################
    # Internal helpers #
    ####################

    async def _get(self, url: str, *, params: dict[str, str]) -> httpx.Response:
        if not self.client:
            self.client = httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            )

        try:
            return await self.client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ProviderAPIError(f"HTTP request failed: {exc}") from exc

    def _decode_json(
        self, response: httpx.Response, response_type: type[T]
    ) -> T:
        """
        Decode a JSON response into a Pydantic model.

        Uses model_validate_json for efficiency (single parse).
        """
        try:
            return response_type.model_validate_json(response.text)
        except pydantic.ValidationError as exc:
            logger.error(
                "Could not decode provider response",
                provider=self.name,
                status_code=response.status_code,
            )
            raise ProviderAPIError(f"Invalid JSON response: {exc}") from exc
