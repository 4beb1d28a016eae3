"""
Configuration variables and fixtures for the service layer tests.
"""

from contextlib import asynccontextmanager

import pytest_asyncio

from usergroups.core.group import GroupData
from usergroups.core.user import UserData
from usergroups.service.groups import GroupService
from usergroups.service.user import UserService


class FakeStore:
    """
    An in-memory stand-in for the stores. Every call is recorded in `calls`
    together with the connection it was made on.
    """

    def __init__(self):
        self.users: dict[int, UserData] = {}
        self.groups: dict[int, GroupData] = {}
        self.memberships: list[tuple[int, int]] = []
        self.calls: list[tuple[str, object]] = []
        self.transactions = 0
        self._next_id = 1

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield f"transaction-{self.transactions}"

    def _record(self, name: str, conn):
        self.calls.append((name, conn))

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    async def find_users_by_fields(self, content, conn=None):
        self._record("find_users_by_fields", conn)
        return [
            u
            for u in self.users.values()
            if (u.name, u.surname, u.birth_date, u.sex)
            == (content.name, content.surname, content.birth_date, content.sex)
        ]

    async def insert_user(self, content, conn=None):
        self._record("insert_user", conn)
        user_id = self._new_id()
        self.users[user_id] = UserData(id=user_id, **content.model_dump())
        return user_id

    async def get_user_by_id(self, user_id, conn=None):
        self._record("get_user_by_id", conn)
        return self.users.get(user_id)

    async def list_users(self, limit, offset, conn=None):
        self._record("list_users", conn)
        return list(self.users.values())[offset : offset + limit]

    async def list_users_by_group(self, group_name, limit, offset, conn=None):
        self._record("list_users_by_group", conn)
        group_ids = {g.id for g in self.groups.values() if g.name == group_name}
        users = [
            self.users[u]
            for u, g in self.memberships
            if g in group_ids and u in self.users
        ]
        return users[offset : offset + limit]

    async def replace_user(self, user_id, content, conn=None):
        self._record("replace_user", conn)
        if user_id in self.users:
            self.users[user_id] = self.users[user_id].model_copy(
                update=content.model_dump(exclude_unset=True)
            )

    async def delete_user(self, user_id, conn=None):
        self._record("delete_user", conn)
        self.users.pop(user_id, None)

    async def delete_memberships_for_user(self, user_id, conn=None):
        self._record("delete_memberships_for_user", conn)
        self.memberships = [(u, g) for u, g in self.memberships if u != user_id]

    async def list_groups(self, conn=None):
        self._record("list_groups", conn)
        return list(self.groups.values())

    async def get_group_by_id(self, group_id, conn=None):
        self._record("get_group_by_id", conn)
        return self.groups.get(group_id)

    async def insert_group(self, content, conn=None):
        self._record("insert_group", conn)
        group_id = self._new_id()
        self.groups[group_id] = GroupData(id=group_id, name=content.name)
        return group_id

    async def replace_group(self, group_id, content, conn=None):
        self._record("replace_group", conn)
        if group_id in self.groups:
            self.groups[group_id] = self.groups[group_id].model_copy(
                update=content.model_dump(exclude_unset=True)
            )

    async def delete_group(self, group_id, conn=None):
        self._record("delete_group", conn)
        self.groups.pop(group_id, None)

    async def add_membership(self, user_id, group_id, conn=None):
        self._record("add_membership", conn)
        self.memberships.append((user_id, group_id))

    async def remove_membership(self, user_id, group_id, conn=None):
        self._record("remove_membership", conn)
        self.memberships = [
            m for m in self.memberships if m != (user_id, group_id)
        ]

    async def list_groups_for_user(self, user_id, conn=None):
        self._record("list_groups_for_user", conn)
        return [
            self.groups[g]
            for u, g in self.memberships
            if u == user_id and g in self.groups
        ]


@pytest_asyncio.fixture
def fake_store():
    yield FakeStore()


@pytest_asyncio.fixture
def fake_user_service(fake_store):
    yield UserService(store=fake_store)


@pytest_asyncio.fixture
def fake_group_service(fake_store):
    yield GroupService(store=fake_store)


@pytest_asyncio.fixture
async def user_service(user_store):
    yield UserService(store=user_store)


@pytest_asyncio.fixture
async def group_service(group_store):
    yield GroupService(store=group_store)
