from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Reading(BaseModel):
    """A single weather observation reported by one provider."""

    model_config = ConfigDict(frozen=True)

    provider: str
    location: str
    temperature: float  # Celsius
    feels_like: float
    humidity: int  # Percent
    pressure: int  # hPa
    wind_speed: float  # m/s
    wind_direction: int  # Degrees
    description: str
    icon: str
    sunrise: datetime | None = None
    sunset: datetime | None = None
    timestamp: datetime
    units: str = "metric"


class AggregatedStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    values: tuple[float, ...] = ()


class AggregatedWeather(BaseModel):
    """Consensus weather for one location across all successful providers."""

    model_config = ConfigDict(frozen=True)

    location: str
    temperature: AggregatedStat
    feels_like: AggregatedStat
    humidity: AggregatedStat
    pressure: AggregatedStat
    wind_speed: AggregatedStat
    description: str
    providers: tuple[str, ...]
    last_updated: datetime


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
