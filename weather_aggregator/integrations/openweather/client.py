from datetime import UTC, datetime

from ...aggregator.types import Reading
from ..common import BaseProvider, InvalidAPIKey, LocationNotFound, ProviderAPIError
from .types import CurrentWeatherResponse

API_URL = "https://api.openweathermap.org/data/2.5/weather"


class OpenWeatherProvider(BaseProvider):
    """
    Current weather from OpenWeatherMap, requested in metric units.
    """

    name = "OpenWeatherMap"

    async def _fetch(self, city: str, country: str) -> Reading:
        response = await self._get(
            API_URL,
            params={
                "q": f"{city},{country}",
                "appid": self.api_key or "",
                "units": "metric",
                "lang": self.language,
            },
        )

        if response.status_code == 404:
            raise LocationNotFound("City not found")
        if response.status_code == 401:
            raise InvalidAPIKey("Invalid API key")
        if response.status_code != 200:
            raise ProviderAPIError(f"API error: status {response.status_code}")

        data = self._decode_json(response, CurrentWeatherResponse)
        if not data.weather:
            raise ProviderAPIError("No weather data in response")

        condition = data.weather[0]
        return Reading(
            provider=self.name,
            location=f"{data.name}, {country}",
            temperature=data.main.temp,
            feels_like=data.main.feels_like,
            humidity=data.main.humidity,
            pressure=data.main.pressure,
            wind_speed=data.wind.speed,
            wind_direction=data.wind.deg,
            description=condition.description,
            icon=condition.icon,
            sunrise=_from_timestamp(data.sys.sunrise),
            sunset=_from_timestamp(data.sys.sunset),
            timestamp=datetime.now(UTC),
            units="metric",
        )


def _from_timestamp(value: int | None) -> datetime | None:
    return datetime.fromtimestamp(value, tz=UTC) if value else None
