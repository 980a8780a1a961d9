"""
Showcase Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one async engine with connection pooling. create_app()
       builds it from Settings and stores it on `app.state.database`; the
       `get_db_session` dependency opens one session per request that
       rolls back on error; services commit their own writes.
Who:   Route handlers (via Depends), the lifespan handler, and tests.

Connection Pooling Strategy (PostgreSQL):
    pool_size / max_overflow come from Settings.
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs (tests, local experiments) keep SQLAlchemy's default pool.
"""

from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from showcase.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic and Database.create_tables() read.
    """
    pass


class Database:
    """
    Process-scoped handle on the store.

    One instance per application; handlers never touch the engine directly,
    they receive sessions through get_db_session().
    """

    def __init__(self, settings: Settings):
        engine_kwargs: Dict[str, Any] = {
            # Echo SQL queries in DEBUG mode for development visibility
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

        # expire_on_commit=False: response models read attributes after the
        # service commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Create any missing tables (tests and CREATE_TABLES_ON_STARTUP)."""
        # Models register themselves with Base.metadata on import
        import showcase.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run SELECT 1; returns False instead of raising when unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's Database
        2. Yields it to the route handler
        3. On error: rolls back and re-raises for the global error handler
        4. Always: closes the session (returns connection to pool)

    Writes are committed by the services (CollectionStore.commit) before the
    handler returns. This teardown may run after the response has been sent,
    so it only rolls back and closes.

    Example usage in a route:
        @router.get("/projects")
        async def list_projects(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
