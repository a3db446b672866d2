"""
Checkout persistence bootstrap

Wires configuration, structured logging and the database engine, and hands
application code a session factory for the repositories.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from shared.core import setup_logging, get_logger
from checkout import __version__
from checkout.core_settings import Settings, get_settings
from checkout.infrastructure.db import create_engine_from_settings, create_session_factory, init_models

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(settings: Optional[Settings] = None) -> AsyncIterator[async_sessionmaker]:
    """Application lifecycle management"""
    settings = settings or get_settings()
    setup_logging(service_name=settings.SERVICE_NAME, level=settings.LOG_LEVEL)
    logger.info(f"Starting {settings.SERVICE_NAME} version {__version__}")

    engine = create_engine_from_settings(settings)
    try:
        await init_models(engine)
    except Exception as e:
        logger.error(f"Failed to initialize database models: {e}")
        await engine.dispose()
        raise

    logger.info(f"{settings.SERVICE_NAME} started successfully")
    try:
        yield create_session_factory(engine)
    finally:
        logger.info(f"Shutting down {settings.SERVICE_NAME}")
        await engine.dispose()
