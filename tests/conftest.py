"""
Core configuration
"""

import os

import pytest_asyncio
import structlog
from sqlmodel import SQLModel

from usergroups.config.settings import Settings
from usergroups.database.group_store import GroupStore
from usergroups.database.user_store import UserStore


@pytest_asyncio.fixture(scope="session")
def database_container(tmp_path_factory):
    # A throwaway SQLite file by default; PostgreSQL when explicitly asked for.
    if not os.environ.get("USERGROUPS_TEST_POSTGRES"):
        yield {
            "database_type": "sqlite",
            "database_db": str(tmp_path_factory.mktemp("database") / "test.db"),
        }
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer() as container:
        yield {
            "database_type": "postgres",
            "database_user": container.username,
            "database_password": container.password,
            "database_port": container.get_exposed_port(container.port),
            "database_host": "localhost",
            "database_db": container.dbname,
            "database_echo": True,
        }


@pytest_asyncio.fixture(scope="session")
def server_settings(database_container):
    yield Settings(**database_container)


@pytest_asyncio.fixture(scope="session")
def database(server_settings: Settings):
    server_settings.sync_manager().create_all()


@pytest_asyncio.fixture(scope="session")
async def session_manager(server_settings: Settings, database):
    manager = server_settings.async_manager()
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture(scope="session")
def logger():
    yield structlog.get_logger()


@pytest_asyncio.fixture
async def clean_database(session_manager):
    """
    Empty every table so that each test starts from nothing.
    """
    async with session_manager.session() as conn:
        async with conn.begin():
            for table in reversed(SQLModel.metadata.sorted_tables):
                await conn.execute(table.delete())

    yield session_manager


@pytest_asyncio.fixture
async def user_store(clean_database):
    yield UserStore(clean_database)


@pytest_asyncio.fixture
async def group_store(clean_database):
    yield GroupStore(clean_database)
