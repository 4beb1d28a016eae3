"""
Base class for the entity stores.

Every store operation accepts an optional `conn`. Without one, the operation
opens its own session and transaction and releases it as soon as the
statement has run. Passing the session yielded by `Store.transaction()` lets
several operations share a single transaction:

store = UserStore(manager)

async with store.transaction() as conn:
    if not await store.find_users_by_fields(content, conn=conn):
        await store.insert_user(content, conn=conn)
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from usergroups.config.managers import AsyncSessionManager


class StoreError(Exception):
    """
    The backend could not execute a statement. The native SQLAlchemy error
    is available as `__cause__`.
    """


class Store:
    manager: AsyncSessionManager

    def __init__(self, manager: AsyncSessionManager):
        self.manager = manager

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Open a session and begin a transaction on it. The transaction is
        committed when the block exits and rolled back if it raises.

        Raises
        ------
        StoreError
            If the backend fails while connecting, executing or committing.
        """
        try:
            async with self.manager.session() as conn:
                async with conn.begin():
                    yield conn
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    @asynccontextmanager
    async def connect(
        self, conn: AsyncSession | None = None
    ) -> AsyncIterator[AsyncSession]:
        """
        Use `conn` if one was given, otherwise run inside a fresh transaction.
        """
        if conn is None:
            async with self.transaction() as conn:
                yield conn
            return

        try:
            yield conn
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
