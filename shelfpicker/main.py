from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelfpicker.api import (
    collection_router,
    games_router,
    health_router,
    users_router,
)
from shelfpicker.api.dependencies import close_library
from shelfpicker.config import settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler; closes the shared BGG client on shutdown."""
    yield
    await close_library()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("shelfpicker"),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(collection_router)
app.include_router(games_router)
app.include_router(health_router)
app.include_router(users_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)
