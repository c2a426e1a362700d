import structlog

from .aggregator.engine import Aggregator
from .config import Config
from .integrations.common import BaseProvider
from .integrations.openweather.client import OpenWeatherProvider
from .integrations.weatherapi.client import WeatherAPIProvider

logger = structlog.get_logger()


def build_providers(config: Config) -> list[BaseProvider]:
    """
    Construct every known provider, whether or not it has credentials.
    """
    return [
        OpenWeatherProvider(
            api_key=config.openweather_api_key, language=config.language
        ),
        WeatherAPIProvider(api_key=config.weatherapi_api_key, language=config.language),
    ]


def create_aggregator(config: Config) -> Aggregator:
    aggregator = Aggregator.from_ttl(config.cache_duration)

    for provider in build_providers(config):
        if aggregator.add_provider(provider):
            logger.info("Provider added", provider=provider.name)
        else:
            logger.debug("Provider not configured, skipping", provider=provider.name)

    return aggregator
