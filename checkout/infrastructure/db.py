from typing import Optional
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from checkout.core_settings import Settings, get_settings
from checkout.infrastructure.models import Base
from shared.core import get_logger

logger = get_logger(__name__)

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; turn it on for every pooled connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def create_engine_from_settings(settings: Optional[Settings] = None, url: Optional[str] = None) -> AsyncEngine:
    settings = settings or get_settings()
    url = url or settings.DATABASE_URL
    backend = make_url(url).get_backend_name()

    kwargs = {"echo": settings.DATABASE_ECHO, "future": True}
    if backend == "sqlite":
        if ":memory:" in url or make_url(url).database in (None, ""):
            # One shared connection, otherwise every session sees its own empty database
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = settings.DATABASE_POOL_SIZE
        kwargs["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
        kwargs["pool_pre_ping"] = True

    engine = create_async_engine(url, **kwargs)
    if backend == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.info(
        "Database engine created",
        extra={'extra_fields': {'backend': backend, 'pool': type(engine.pool).__name__}}
    )
    return engine

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

async def init_models(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema synchronised", extra={'extra_fields': {'tables': sorted(Base.metadata.tables)}})

async def drop_models(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
