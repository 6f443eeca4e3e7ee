from contextlib import asynccontextmanager

from fastapi import FastAPI
from .routes import router
from ..core.config import settings
from ..core.logging import configure_logging
from ..providers.overpass import OverpassProvider


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    async with OverpassProvider() as provider:
        app.state.provider = provider
        yield


app = FastAPI(title="Listy API", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/v1")
