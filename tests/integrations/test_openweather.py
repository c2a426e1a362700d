from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from weather_aggregator.integrations.common import (
    InvalidAPIKey,
    LocationNotFound,
    ProviderAPIError,
    ProviderNotConfigured,
)
from weather_aggregator.integrations.openweather.client import (
    API_URL,
    OpenWeatherProvider,
)

RESPONSE = {
    "name": "Paris",
    "main": {"temp": 12.3, "feels_like": 11.1, "humidity": 76, "pressure": 1012},
    "wind": {"speed": 4.1, "deg": 230},
    "weather": [{"description": "light rain", "icon": "10d"}],
    "sys": {"sunrise": 1700000000, "sunset": 1700030000},
}


def make_provider(
    status_code: int = 200, json: Any = RESPONSE, api_key: str | None = "secret"
) -> tuple[OpenWeatherProvider, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=json)

    provider = OpenWeatherProvider(
        api_key=api_key, language="en", transport=httpx.MockTransport(handler)
    )
    return provider, requests


async def test_fetch() -> None:
    provider, requests = make_provider()

    async with provider:
        reading = await provider.fetch("Paris", "FR")

    assert reading.provider == "OpenWeatherMap"
    assert reading.location == "Paris, FR"
    assert reading.temperature == 12.3
    assert reading.feels_like == 11.1
    assert reading.humidity == 76
    assert reading.pressure == 1012
    assert reading.wind_speed == 4.1
    assert reading.wind_direction == 230
    assert reading.description == "light rain"
    assert reading.icon == "10d"
    assert reading.sunrise == datetime.fromtimestamp(1700000000, tz=UTC)
    assert reading.sunset == datetime.fromtimestamp(1700030000, tz=UTC)
    assert reading.units == "metric"

    [request] = requests
    assert str(request.url).startswith(API_URL)
    assert request.url.params["q"] == "Paris,FR"
    assert request.url.params["appid"] == "secret"
    assert request.url.params["units"] == "metric"
    assert request.url.params["lang"] == "en"


async def test_fetch_without_sun_times() -> None:
    response = {key: value for key, value in RESPONSE.items() if key != "sys"}
    provider, _ = make_provider(json=response)

    reading = await provider.fetch("Paris", "FR")

    assert reading.sunrise is None
    assert reading.sunset is None


@pytest.mark.parametrize(
    "status_code,exception",
    [
        (404, LocationNotFound),
        (401, InvalidAPIKey),
        (500, ProviderAPIError),
    ],
)
async def test_fetch_error_status(
    status_code: int, exception: type[Exception]
) -> None:
    provider, _ = make_provider(status_code=status_code, json={"message": "nope"})

    with pytest.raises(exception):
        await provider.fetch("Paris", "FR")


async def test_fetch_status_message() -> None:
    provider, _ = make_provider(status_code=503, json={})

    with pytest.raises(ProviderAPIError, match="API error: status 503"):
        await provider.fetch("Paris", "FR")


async def test_fetch_no_weather_data() -> None:
    provider, _ = make_provider(json={**RESPONSE, "weather": []})

    with pytest.raises(ProviderAPIError, match="No weather data"):
        await provider.fetch("Paris", "FR")


async def test_fetch_invalid_body() -> None:
    provider, _ = make_provider(json={"unexpected": True})

    with pytest.raises(ProviderAPIError, match="Invalid JSON response"):
        await provider.fetch("Paris", "FR")


async def test_fetch_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = OpenWeatherProvider(
        api_key="secret", transport=httpx.MockTransport(handler)
    )

    with pytest.raises(ProviderAPIError, match="HTTP request failed"):
        await provider.fetch("Paris", "FR")


async def test_not_configured() -> None:
    provider, requests = make_provider(api_key=None)

    assert not provider.is_available()
    with pytest.raises(ProviderNotConfigured):
        await provider.fetch("Paris", "FR")
    assert requests == []


async def test_close() -> None:
    provider, _ = make_provider()
    await provider.fetch("Paris", "FR")
    assert provider.client is not None

    await provider.close()
    assert provider.client is None
