"""
Configuration loaded from the environment.

A `.env` file in the working directory is read first, variables already set
in the environment take precedence.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class ConfigurationError(Exception):
    """The configuration is incomplete or invalid."""

    pass


@dataclass(frozen=True)
class Config:
    openweather_api_key: str = ""
    weatherapi_api_key: str = ""
    server_port: int = 8080
    cache_duration: int = 10  # Minutes
    log_level: str = "info"
    default_country: str = "RU"
    language: str = "en"


def load_config() -> Config:
    load_dotenv()

    config = Config(
        openweather_api_key=getenv("OPENWEATHER_API_KEY", ""),
        weatherapi_api_key=getenv("WEATHERAPI_API_KEY", ""),
        server_port=getenv_int("SERVER_PORT", 8080),
        cache_duration=getenv_int("CACHE_DURATION", 10),
        log_level=getenv("LOG_LEVEL", "info"),
        default_country=getenv("DEFAULT_COUNTRY", "RU"),
        language=getenv("WEATHER_LANG", "en"),
    )

    if not config.openweather_api_key and not config.weatherapi_api_key:
        raise ConfigurationError(
            "At least one API key is required "
            "(OPENWEATHER_API_KEY or WEATHERAPI_API_KEY)"
        )

    return config


def getenv(key: str, default: str) -> str:
    if value := os.getenv(key):
        return value
    return default


def getenv_int(key: str, default: int) -> int:
    """
    Get an integer environment variable, falling back to the default when
    it is unset or not a valid integer.
    """
    try:
        return int(getenv(key, str(default)))
    except ValueError:
        return default
