"""
Engine and session managers for the user/group schema.
"""

from sqlalchemy import URL, Engine, Table
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Session, sessionmaker
from sqlmodel import SQLModel, create_engine

from usergroups.database.meta import ALL_TABLES


def schema_tables() -> list[Table]:
    """
    The `Table` objects owned by this service: `users`, `user_groups` and
    `user_to_group`. Schema operations are restricted to these so that a
    shared database keeps any other tables it holds.
    """
    return [getattr(table, "__table__", table) for table in ALL_TABLES]


class SyncSessionManager:
    """
    Blocking engine used for schema setup from the command line and from the
    test fixtures:

    SyncSessionManager(settings.sync_uri).create_all()
    """

    engine: Engine
    session: sessionmaker[Session]

    def __init__(self, connection_url: str | URL, echo: bool = False):
        self.engine = create_engine(connection_url, echo=echo)
        self.session = sessionmaker(self.engine)

    def create_all(self):
        """
        Create any of the service tables that are missing.
        """
        with self.engine.begin() as conn:
            SQLModel.metadata.create_all(conn, tables=schema_tables())

    def drop_all(self):
        """
        Drop the service tables along with every user, group and membership
        they hold.
        """
        with self.engine.begin() as conn:
            SQLModel.metadata.drop_all(conn, tables=schema_tables())


class AsyncSessionManager:
    """
    The store handle. One instance is built per application and handed to
    `UserStore` and `GroupStore`, which open a session per operation or per
    transaction block:

    async with manager.session() as conn:
        async with conn.begin():
            user = await conn.get(User, 1)

    Call `dispose` on shutdown to close the pooled connections.
    """

    engine: AsyncEngine
    session: async_sessionmaker[AsyncSession]

    def __init__(self, connection_url: str | URL, echo: bool = False):
        self.engine = create_async_engine(connection_url, echo=echo)
        self.session = async_sessionmaker(self.engine)

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all, tables=schema_tables())

    async def drop_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all, tables=schema_tables())

    async def dispose(self):
        await self.engine.dispose()
