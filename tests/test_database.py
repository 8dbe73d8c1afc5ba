"""
Tests for the database handle lifecycle.
"""

import pytest
from sqlalchemy import text

from app.config import Settings
from app.database import Database, engine_options
from app.utils.exceptions import DatabaseNotConnectedError, RepositoryError

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


class TestDatabaseLifecycle:

    @pytest.mark.asyncio
    async def test_session_before_connect(self):
        database = Database(MEMORY_URL, **engine_options(MEMORY_URL))

        assert database.is_connected is False
        with pytest.raises(DatabaseNotConnectedError):
            async with database.session():
                pass
        with pytest.raises(DatabaseNotConnectedError):
            database.engine

    @pytest.mark.asyncio
    async def test_connect_and_dispose(self):
        database = Database(MEMORY_URL, **engine_options(MEMORY_URL))

        await database.connect()
        await database.connect()
        assert database.is_connected is True
        assert await database.check_connection() is True

        await database.dispose()
        await database.dispose()
        assert database.is_connected is False
        assert await database.check_connection() is False

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with Database(MEMORY_URL, **engine_options(MEMORY_URL)) as database:
            async with database.session() as session:
                result = await session.execute(text("SELECT 1"))
                assert result.scalar() == 1
        assert database.is_connected is False

    @pytest.mark.asyncio
    async def test_create_and_drop_tables(self):
        async with Database(MEMORY_URL, **engine_options(MEMORY_URL)) as database:
            await database.create_tables()
            async with database.engine.connect() as conn:
                result = await conn.execute(text("SELECT name FROM sqlite_master WHERE type = 'table'"))
                tables = {row[0] for row in result}
            assert {"users", "properties", "reservations", "property_reviews"} <= tables

            await database.drop_tables()
            async with database.engine.connect() as conn:
                result = await conn.execute(text("SELECT name FROM sqlite_master WHERE type = 'table'"))
                assert {row[0] for row in result}.isdisjoint({"users", "properties"})

    @pytest.mark.asyncio
    async def test_connect_failure(self, tmp_path):
        """Test an unreachable database raises instead of half-connecting."""
        url = f"sqlite+aiosqlite:///{tmp_path}/missing/dir/lightbnb.db"
        database = Database(url, **engine_options(url))

        with pytest.raises(RepositoryError) as exc_info:
            await database.connect()

        assert exc_info.value.operation == "connect"
        assert database.is_connected is False

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self):
        async with Database(MEMORY_URL, **engine_options(MEMORY_URL)) as database:
            await database.create_tables()

            with pytest.raises(RuntimeError):
                async with database.session() as session:
                    await session.execute(
                        text("INSERT INTO users (name, email, password) VALUES ('a', 'a@example.com', 'x')")
                    )
                    raise RuntimeError("boom")

            async with database.session() as session:
                result = await session.execute(text("SELECT count(*) FROM users"))
                assert result.scalar() == 0


class TestEngineOptions:

    def test_sqlite_uses_static_pool(self):
        options = engine_options(MEMORY_URL)

        assert options["connect_args"] == {"check_same_thread": False}
        assert "pool_size" not in options

    def test_postgres_uses_configured_pool(self):
        config = Settings(_env_file=None, pool_size=3, max_overflow=4)

        options = engine_options("postgresql+asyncpg://u:p@localhost/db", config)

        assert options["pool_size"] == 3
        assert options["max_overflow"] == 4
        assert options["pool_pre_ping"] is True

    def test_from_settings_uses_test_url_when_testing(self):
        config = Settings(_env_file=None, environment="testing", test_database_url="sqlite:///:memory:")

        database = Database.from_settings(config)

        assert database.url == "sqlite+aiosqlite:///:memory:"
        assert "poolclass" in database.engine_kwargs
