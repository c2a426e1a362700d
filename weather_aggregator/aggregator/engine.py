import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime

import structlog

from ..integrations.common import Provider
from ..utils import timed
from .cache import CacheStore
from .exceptions import (
    AllProvidersFailed,
    EmptyResultSet,
    NoProvidersAvailable,
    ProviderCallFailed,
)
from .stats import aggregate_numeric, most_frequent
from .types import AggregatedWeather, Reading

logger = structlog.get_logger()


class Aggregator:
    """
    Fans a weather request out to every registered provider and combines
    the successful readings into one cached consensus.

    Providers are registered once at startup, before any request is served,
    and the list is treated as read-only afterwards.
    """

    def __init__(self, cache: CacheStore) -> None:
        self.cache = cache
        self.providers: list[Provider] = []

    @classmethod
    def from_ttl(cls, cache_duration_minutes: int) -> "Aggregator":
        return cls(CacheStore(cache_duration_minutes))

    def add_provider(self, provider: Provider) -> bool:
        """
        Register a provider. Providers that report themselves unavailable
        (e.g. missing credentials) are skipped.
        """
        if not provider.is_available():
            return False

        self.providers.append(provider)
        return True

    def provider_count(self) -> int:
        return len(self.providers)

    def provider_names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    def clear_cache(self) -> None:
        self.cache.clear()

    async def close(self) -> None:
        """
        Close every provider. A provider failing to close is logged and
        does not stop the rest from being closed.
        """
        for provider in self.providers:
            try:
                await provider.close()
            except Exception as exc:
                logger.warning(
                    "Failed to close provider", provider=provider.name, error=repr(exc)
                )

    async def get_weather(
        self, city: str, country: str, *, timeout: float | None = None
    ) -> AggregatedWeather:
        """
        Get the aggregated weather for a location.

        A fresh cached result is returned without contacting any provider.
        Otherwise all providers are queried concurrently and every call is
        awaited, successful or not, before aggregating. If `timeout` is
        given, all provider calls share a single deadline.
        """

        cache_key = f"{city},{country}"

        if (cached := self.cache.get(cache_key)) is not None:
            logger.debug("Serving weather from cache", key=cache_key)
            return cached

        if not self.providers:
            raise NoProvidersAvailable()

        deadline = None
        if timeout is not None:
            deadline = asyncio.get_running_loop().time() + timeout

        readings: list[Reading] = []
        errors: list[ProviderCallFailed] = []

        async def call(provider: Provider) -> None:
            try:
                with timed("Provider call", provider=provider.name):
                    async with asyncio.timeout_at(deadline):
                        reading = await provider.fetch(city, country)
            except Exception as exc:
                logger.warning(
                    "Provider call failed", provider=provider.name, error=repr(exc)
                )
                errors.append(ProviderCallFailed(provider.name, exc))
            else:
                if reading is not None:
                    readings.append(reading)

        async with asyncio.TaskGroup() as tg:
            for provider in self.providers:
                tg.create_task(call(provider))

        if not readings:
            if errors:
                raise AllProvidersFailed(errors)
            raise EmptyResultSet()

        aggregated = aggregate_readings(readings, city=city, country=country)
        logger.info(
            "Aggregated weather",
            key=cache_key,
            providers=aggregated.providers,
            failed=len(errors),
        )

        self.cache.put(cache_key, aggregated)
        return aggregated


def aggregate_readings(
    readings: Sequence[Reading], *, city: str, country: str
) -> AggregatedWeather:
    """
    Combine readings into a single result. Only the given readings
    contribute, in the order they are given.
    """

    return AggregatedWeather(
        location=f"{city}, {country}",
        temperature=aggregate_numeric([r.temperature for r in readings]),
        feels_like=aggregate_numeric([r.feels_like for r in readings]),
        humidity=aggregate_numeric([float(r.humidity) for r in readings]),
        pressure=aggregate_numeric([float(r.pressure) for r in readings]),
        wind_speed=aggregate_numeric([r.wind_speed for r in readings]),
        description=most_frequent([r.description for r in readings]),
        providers=tuple(r.provider for r in readings),
        last_updated=datetime.now(UTC),
    )
