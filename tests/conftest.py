from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from datetime import UTC, datetime, timedelta

import httpx
import pytest
import structlog

from weather_aggregator.aggregator.cache import CacheStore
from weather_aggregator.aggregator.dependencies import get_aggregator, get_config
from weather_aggregator.aggregator.engine import Aggregator
from weather_aggregator.aggregator.types import Reading
from weather_aggregator.config import Config
from weather_aggregator.integrations.common import ProviderAPIError
from weather_aggregator.server import app


def make_reading(provider: str = "A", **kwargs: object) -> Reading:
    values: dict[str, object] = {
        "provider": provider,
        "location": "Paris, FR",
        "temperature": 10.0,
        "feels_like": 8.0,
        "humidity": 50,
        "pressure": 1013,
        "wind_speed": 3.0,
        "wind_direction": 180,
        "description": "clear sky",
        "icon": "01d",
        "timestamp": datetime.now(UTC),
    }
    values.update(kwargs)
    return Reading.model_validate(values)


class FakeProvider:
    """
    A provider returning a fixed reading, raising a fixed error, or
    awaiting an arbitrary hook before answering.
    """

    def __init__(
        self,
        name: str,
        *,
        reading: Reading | None = None,
        error: Exception | None = None,
        available: bool = True,
        before: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.name = name
        self.reading = reading
        self.error = error
        self.available = available
        self.before = before
        self.calls: list[tuple[str, str]] = []
        self.cancelled = False
        self.closed = False

    def is_available(self) -> bool:
        return self.available

    async def fetch(self, city: str, country: str) -> Reading:
        self.calls.append((city, country))
        try:
            if self.before:
                await self.before()
        except asyncio.CancelledError:
            self.cancelled = True
            raise

        if self.error:
            raise self.error
        return self.reading  # type: ignore[return-value]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheStore:
    return CacheStore(10, clock=clock)


@pytest.fixture
def aggregator(cache: CacheStore) -> Aggregator:
    return Aggregator(cache)


@pytest.fixture
def provider_a() -> FakeProvider:
    return FakeProvider("A", reading=make_reading("A", temperature=10.0, humidity=50))


@pytest.fixture
def provider_b() -> FakeProvider:
    return FakeProvider("B", reading=make_reading("B", temperature=20.0, humidity=70))


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider("Broken", error=ProviderAPIError("API error: status 500"))


@pytest.fixture
def config() -> Config:
    return Config(openweather_api_key="ow-key", weatherapi_api_key="wa-key")


########
# APIs #
########


@pytest.fixture
async def client(
    aggregator: Aggregator, config: Config
) -> AsyncIterator[httpx.AsyncClient]:
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    app.dependency_overrides[get_config] = lambda: config

    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.clear()
