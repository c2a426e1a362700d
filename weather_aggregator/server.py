from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .aggregator.api import router
from .bootstrap import create_aggregator
from .config import load_config
from .utils import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.config = config = load_config()
    configure_logging(config.log_level)

    app.state.aggregator = aggregator = create_aggregator(config)
    try:
        yield
    finally:
        await aggregator.close()


app = FastAPI(title="Weather aggregator", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"])
app.include_router(router)
