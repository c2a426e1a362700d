from datetime import UTC, datetime

import pydantic

from ...aggregator.types import Reading
from ..common import BaseProvider, ProviderAPIError
from .types import CurrentWeatherResponse, ErrorResponse

API_URL = "https://api.weatherapi.com/v1/current.json"

KPH_PER_MPS = 3.6


class WeatherAPIProvider(BaseProvider):
    """
    Current weather from weatherapi.com.

    WeatherAPI reports wind in km/h, which is converted to m/s to match the
    other providers.
    """

    name = "WeatherAPI"

    async def _fetch(self, city: str, country: str) -> Reading:
        response = await self._get(
            API_URL,
            params={
                "key": self.api_key or "",
                "q": f"{city},{country}",
                "lang": self.language,
            },
        )

        if response.status_code != 200:
            try:
                error = ErrorResponse.model_validate_json(response.text).error
            except pydantic.ValidationError:
                error = None
            if error and error.message:
                raise ProviderAPIError(f"WeatherAPI error: {error.message}")
            raise ProviderAPIError(f"API error: status {response.status_code}")

        data = self._decode_json(response, CurrentWeatherResponse)
        current = data.current

        return Reading(
            provider=self.name,
            location=f"{data.location.name}, {data.location.country}",
            temperature=current.temp_c,
            feels_like=current.feelslike_c,
            humidity=current.humidity,
            pressure=int(current.pressure_mb),
            wind_speed=current.wind_kph / KPH_PER_MPS,
            wind_direction=current.wind_degree,
            description=current.condition.text,
            icon=f"https:{current.condition.icon}",
            timestamp=datetime.now(UTC),
            units="metric",
        )
