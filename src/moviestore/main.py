from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from moviestore.config import get_settings
from moviestore.db import create_db_and_tables
from moviestore.logging_config import configure_logging
from moviestore.routers import crew, genres, movies, orders

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    create_db_and_tables()
    logger.info('moviestore started (environment=%s)', get_settings().environment)
    yield


app = FastAPI(
    title='moviestore',
    description='Movie store catalog and admin API',
    version='0.1.0',
    lifespan=lifespan,
)


app.include_router(movies.router)
app.include_router(genres.router)
app.include_router(orders.router)
app.include_router(crew.router)


@app.get('/')
async def root() -> dict[str, str]:
    return {'message': 'Hello, moviestore!'}


@app.get('/health')
async def health() -> dict[str, str]:
    return {'status': 'ok'}
