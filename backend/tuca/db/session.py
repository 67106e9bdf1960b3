"""
Async engine and session handling for the SQL storage backend
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, text

from tuca.core.settings import settings

logger = logging.getLogger(__name__)

# Sync driver -> async driver used by create_async_engine
ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "postgres": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def to_async_url(database_url: str) -> str:
    """Rewrite a plain postgresql:// or sqlite:// URL to its async driver"""
    if not database_url:
        raise ValueError("DB_URL environment variable is required")

    scheme, sep, rest = database_url.partition("://")
    if not sep or not scheme:
        raise ValueError(f"Invalid database URL format: {database_url!r}")
    return f"{ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"


class DatabaseManager:
    """Owns the engine and hands out sessions to DatabaseStorage"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = to_async_url(database_url or settings.DB_URL)
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None
        self._stats: Dict[str, Any] = {
            "connections_opened": 0,
            "sessions_opened": 0,
            "session_errors": 0,
            "last_health_check": None,
            "health_status": "unknown",
        }

    @property
    def dialect(self) -> str:
        return make_url(self.database_url).get_backend_name()

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
        if self.dialect == "postgresql":
            options.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )
        return options

    def _register_listeners(self, engine: AsyncEngine) -> None:
        is_sqlite = self.dialect == "sqlite"

        @event.listens_for(engine.sync_engine, "connect")
        def on_connect(dbapi_connection, connection_record):
            self._stats["connections_opened"] += 1
            if is_sqlite:
                # SQLite ignores foreign keys unless asked per connection
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        @event.listens_for(engine.sync_engine, "handle_error")
        def on_error(exception_context):
            logger.error(f"Database error: {exception_context.original_exception}")

    async def initialize(self) -> None:
        try:
            engine = create_async_engine(self.database_url, **self._engine_options())
        except (ArgumentError, ImportError) as e:
            logger.error(f"Cannot create database engine for {self.dialect}: {e}")
            raise

        self._register_listeners(engine)
        self.engine = engine
        self.session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(f"Database engine ready ({self.dialect})")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that rolls back on any error and always closes"""
        if self.session_factory is None:
            raise RuntimeError("Database manager not initialized")

        self._stats["sessions_opened"] += 1
        async with self.session_factory() as session:
            try:
                yield session
            except Exception as e:
                self._stats["session_errors"] += 1
                if isinstance(e, SQLAlchemyError):
                    logger.error(f"Database session error: {e}")
                await session.rollback()
                raise

    async def init_db(self) -> None:
        """Create any missing tables"""
        if self.engine is None:
            raise RuntimeError("Database engine not initialized")

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info(f"Tables ensured: {', '.join(sorted(SQLModel.metadata.tables))}")

    async def _existing_tables(self) -> set:
        async with self.engine.connect() as conn:
            return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))

    async def health_check(self) -> Dict[str, Any]:
        health: Dict[str, Any] = {"status": "healthy", "backend": "database", "dialect": self.dialect, "checks": {}}

        started = time.perf_counter()
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
            health["checks"]["connectivity"] = {
                "status": "pass",
                "response_time": f"{time.perf_counter() - started:.3f}s",
            }

            missing = set(SQLModel.metadata.tables) - await self._existing_tables()
            health["checks"]["schema"] = {
                "status": "fail" if missing else "pass",
                "missing_tables": sorted(missing),
            }
            if missing:
                health["status"] = "degraded"
        except (SQLAlchemyError, OSError, RuntimeError) as e:
            logger.error(f"Database health check failed: {e}")
            health["status"] = "unhealthy"
            health["checks"]["connectivity"] = {"status": "fail", "error": str(e)}

        self._stats["health_status"] = health["status"]
        self._stats["last_health_check"] = time.time()
        return health

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.session_factory = None

    def get_connection_stats(self) -> Dict[str, Any]:
        return dict(self._stats)
