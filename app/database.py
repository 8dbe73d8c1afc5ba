"""
Database connection and session management.
Provides an explicitly constructed database handle owning the async engine and its pool.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import Integer, event, text
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
from app.config import Settings, settings as default_settings
from app.utils.exceptions import DatabaseNotConnectedError, RepositoryError
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table carries a generated integer primary key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def engine_options(url: str, config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Build create_async_engine keyword arguments for a database URL.

    SQLite connections share one in-process connection; server databases
    get a bounded pool validated before use.
    """
    config = config or default_settings
    if url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_size": config.pool_size,
        "max_overflow": config.max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": config.pool_recycle,
        "pool_timeout": config.pool_timeout,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite only enforces REFERENCES constraints when asked to, per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Handle on a single database: engine, connection pool and session factory.

    Created once at startup, passed to whoever needs sessions, and disposed at
    shutdown. Can also be used as an async context manager.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        """Build a handle for the database the configured environment points at."""
        config = config or default_settings
        url = config.active_database_url
        return cls(url, echo=config.debug, **engine_options(url, config))

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotConnectedError()
        return self._engine

    async def connect(self) -> None:
        """
        Create the engine and verify connectivity with a trivial query.

        Raises:
            RepositoryError: If the database cannot be reached
        """
        if self._engine is not None:
            return

        self._engine = create_async_engine(self.url, echo=self.echo, **self.engine_kwargs)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: {e}")
            await self.dispose()
            raise RepositoryError("connect", str(e)) from e

        logger.info(f"Connected to database {self._engine.url.render_as_string(hide_password=True)}")

    async def dispose(self) -> None:
        """Release every pooled connection. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Open a session for one unit of work.
        Rolls back if the block raises and always closes the session.
        """
        if self._session_factory is None:
            raise DatabaseNotConnectedError()

        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                result.scalar()
            logger.info("Database connection successful")
            return True
        except (SQLAlchemyError, DatabaseNotConnectedError) as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    async def create_tables(self) -> None:
        """Create all tables known to the model metadata."""
        # Importing the models registers their tables on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all tables known to the model metadata."""
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()
