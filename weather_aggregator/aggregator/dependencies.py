from typing import Annotated

from fastapi import Depends, Request

from ..config import Config
from .engine import Aggregator


def get_aggregator(request: Request) -> Aggregator:
    return request.app.state.aggregator


def get_config(request: Request) -> Config:
    return request.app.state.config


CurrentAggregator = Annotated[Aggregator, Depends(get_aggregator)]
CurrentConfig = Annotated[Config, Depends(get_config)]
