"""
Statements against the `users` table.
"""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from usergroups.core.models import CreateUserContent, UpdateUserContent
from usergroups.core.user import UserData

from .group import Group, user_to_group
from .store import Store
from .user import User


class UserStore(Store):
    async def list_users(
        self, limit: int, offset: int, conn: AsyncSession | None = None
    ) -> list[UserData]:
        """
        List users in the backend's natural order; no ordering is applied.
        """
        async with self.connect(conn) as conn:
            result = await conn.execute(select(User).limit(limit).offset(offset))
            return [u.to_core() for u in result.scalars().all()]

    async def list_users_by_group(
        self,
        group_name: str,
        limit: int,
        offset: int,
        conn: AsyncSession | None = None,
    ) -> list[UserData]:
        """
        List the members of every group whose name is exactly `group_name`.
        """
        query = (
            select(User)
            .join(user_to_group, User.id == user_to_group.c.user_id)
            .join(Group, user_to_group.c.group_id == Group.id)
            .where(Group.name == group_name)
            .limit(limit)
            .offset(offset)
        )

        async with self.connect(conn) as conn:
            result = await conn.execute(query)
            return [u.to_core() for u in result.scalars().all()]

    async def get_user_by_id(
        self, user_id: int, conn: AsyncSession | None = None
    ) -> UserData | None:
        async with self.connect(conn) as conn:
            user = await conn.get(User, user_id)
            return user.to_core() if user is not None else None

    async def find_users_by_fields(
        self, content: CreateUserContent, conn: AsyncSession | None = None
    ) -> list[UserData]:
        """
        Exact match on name, surname, birth date and sex at once.
        """
        query = select(User).where(
            User.name == content.name,
            User.surname == content.surname,
            User.birth_date == content.birth_date,
            User.sex == content.sex,
        )

        async with self.connect(conn) as conn:
            result = await conn.execute(query)
            return [u.to_core() for u in result.scalars().all()]

    async def insert_user(
        self, content: CreateUserContent, conn: AsyncSession | None = None
    ) -> int:
        """
        Insert a user and return the identifier assigned by the backend.
        """
        async with self.connect(conn) as conn:
            user = User(**content.model_dump())
            conn.add(user)
            await conn.flush()
            return user.id

    async def replace_user(
        self,
        user_id: int,
        content: UpdateUserContent,
        conn: AsyncSession | None = None,
    ) -> None:
        """
        Overwrite the fields that were set on `content`. An unknown `user_id`
        affects no rows and is not reported; an empty `content` issues no
        statement at all.
        """
        values = content.model_dump(exclude_unset=True)

        if not values:
            return

        async with self.connect(conn) as conn:
            await conn.execute(update(User).where(User.id == user_id).values(**values))

    async def delete_user(self, user_id: int, conn: AsyncSession | None = None) -> None:
        async with self.connect(conn) as conn:
            await conn.execute(delete(User).where(User.id == user_id))

    async def delete_memberships_for_user(
        self, user_id: int, conn: AsyncSession | None = None
    ) -> None:
        async with self.connect(conn) as conn:
            await conn.execute(
                delete(user_to_group).where(user_to_group.c.user_id == user_id)
            )
