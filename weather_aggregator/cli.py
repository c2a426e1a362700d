import asyncio
import inspect

import click
import structlog
import uvicorn

from .aggregator.exceptions import AggregatorError
from .aggregator.types import AggregatedWeather
from .bootstrap import build_providers, create_aggregator
from .config import Config, ConfigurationError, load_config
from .utils import configure_logging

logger = structlog.get_logger()

CLI_TIMEOUT_SECONDS = 10.0


class AsyncAwareContext(click.Context):
    """
    A click context that invokes async functions with asyncio.run.
    """

    def invoke(self, *args, **kwargs):
        r = super().invoke(*args, **kwargs)
        if inspect.isawaitable(r):
            return asyncio.run(r)
        else:
            return r


click.Command.context_class = AsyncAwareContext


@click.group(help="Get the weather from several sources and aggregate it")
@click.pass_context
def cli(ctx: click.Context) -> None:
    try:
        config = load_config()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    configure_logging(config.log_level)
    ctx.obj = config


@cli.command(help="Get the weather for a city")
@click.argument("city")
@click.option(
    "--country", "-c", help="Country code (e.g. RU, US), defaults to DEFAULT_COUNTRY"
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_obj
async def get(config: Config, city: str, *, country: str | None, output: str) -> None:
    aggregator = create_aggregator(config)
    try:
        weather = await aggregator.get_weather(
            city, country or config.default_country, timeout=CLI_TIMEOUT_SECONDS
        )
    except AggregatorError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        await aggregator.close()

    if output == "json":
        click.echo(weather.model_dump_json(indent=2))
    else:
        click.echo(format_weather(weather))


def format_weather(weather: AggregatedWeather) -> str:
    temperature = weather.temperature
    return "\n".join(
        [
            f"Weather in {weather.location}",
            "=" * 40,
            f"Temperature: {temperature.average:.1f}°C "
            f"(min: {temperature.min:.1f}°C, max: {temperature.max:.1f}°C)",
            f"Feels like: {weather.feels_like.average:.1f}°C",
            f"Humidity: {weather.humidity.average:.0f}%",
            f"Pressure: {weather.pressure.average:.0f} hPa",
            f"Wind speed: {weather.wind_speed.average:.1f} m/s",
            f"Description: {weather.description}",
            f"Sources: {', '.join(weather.providers)}",
            f"Updated: {weather.last_updated:%H:%M:%S}",
        ]
    )


@cli.command(help="List weather providers and whether they are configured")
@click.pass_obj
def providers(config: Config) -> None:
    click.echo("Weather providers:")
    click.echo("-" * 30)

    for provider in build_providers(config):
        if provider.is_available():
            click.echo(f"✓ {provider.name}")
        else:
            click.echo(f"✗ {provider.name} (not configured)")


@cli.command(name="clear-cache", help="Clear cached weather")
@click.pass_obj
def clear_cache(config: Config) -> None:
    create_aggregator(config).clear_cache()
    click.echo("Cache cleared")


@cli.command(help="Run the HTTP server")
@click.option("--host", default="0.0.0.0", help="Address to bind to")
@click.option("--port", type=int, help="Port to listen on (default: SERVER_PORT)")
@click.pass_obj
def server(config: Config, *, host: str, port: int | None) -> None:
    port = port or config.server_port
    logger.info("Starting server", host=host, port=port)
    uvicorn.run("weather_aggregator.server:app", host=host, port=port)
