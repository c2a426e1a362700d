"""
API endpoints for aggregated weather.
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse, JSONResponse

from .dependencies import CurrentAggregator, CurrentConfig
from .exceptions import AggregatorError
from .types import AggregatedWeather, ErrorResponse

logger = structlog.get_logger()

router = APIRouter()

REQUEST_TIMEOUT_SECONDS = 15.0

HOME_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>Weather aggregator</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; }}
        .container {{ max-width: 800px; margin: 0 auto; }}
        .api-link {{ background: #f0f0f0; padding: 20px; border-radius: 5px; margin: 20px 0; }}
        code {{ background: #eee; padding: 2px 4px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Weather aggregator</h1>
        <p>Combines current weather from several providers into one reading.</p>
        <div class="api-link">
            <h3>API endpoints:</h3>
            <ul>
                <li><code>GET /api/weather?city=Moscow&amp;country=RU</code> - get the weather</li>
                <li><code>GET /api/health</code> - service health</li>
                <li><code>DELETE /api/cache</code> - clear cached results</li>
            </ul>
        </div>
        <p>Example:</p>
        <pre><code>curl "http://localhost:{port}/api/weather?city=Moscow&amp;country=RU"</code></pre>
    </div>
</body>
</html>
"""


def error_response(
    status_code: int, error: str, details: str | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(
            exclude_none=True
        ),
    )


@router.get(
    "/api/weather",
    response_model=AggregatedWeather,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_weather(
    aggregator: CurrentAggregator,
    config: CurrentConfig,
    city: str | None = None,
    country: str | None = None,
) -> AggregatedWeather | JSONResponse:
    """
    Get the current weather for a city, aggregated across all providers.
    """
    if not city:
        return error_response(status.HTTP_400_BAD_REQUEST, "City is required")

    try:
        return await aggregator.get_weather(
            city,
            country or config.default_country,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except AggregatorError as exc:
        logger.error("Failed to fetch weather", city=city, error=str(exc))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch weather",
            details=str(exc),
        )


@router.get("/api/health")
async def get_health(aggregator: CurrentAggregator) -> dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "providers": aggregator.provider_count(),
        "provider_names": aggregator.provider_names(),
    }


@router.delete("/api/cache")
async def clear_cache(aggregator: CurrentAggregator) -> dict[str, str]:
    aggregator.clear_cache()
    return {"status": "cleared"}


@router.get("/", response_class=HTMLResponse)
async def home(config: CurrentConfig) -> str:
    return HOME_PAGE.format(port=config.server_port)
