"""
Statements against the `user_groups` and `user_to_group` tables.
"""

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from usergroups.core.group import GroupData
from usergroups.core.models import GroupContent, UpdateGroupContent

from .group import Group, user_to_group
from .store import Store


class GroupStore(Store):
    async def list_groups(self, conn: AsyncSession | None = None) -> list[GroupData]:
        async with self.connect(conn) as conn:
            result = await conn.execute(select(Group))
            return [g.to_core() for g in result.scalars().all()]

    async def get_group_by_id(
        self, group_id: int, conn: AsyncSession | None = None
    ) -> GroupData | None:
        async with self.connect(conn) as conn:
            group = await conn.get(Group, group_id)
            return group.to_core() if group is not None else None

    async def insert_group(
        self, content: GroupContent, conn: AsyncSession | None = None
    ) -> int:
        async with self.connect(conn) as conn:
            group = Group(**content.model_dump())
            conn.add(group)
            await conn.flush()
            return group.id

    async def replace_group(
        self,
        group_id: int,
        content: UpdateGroupContent,
        conn: AsyncSession | None = None,
    ) -> None:
        values = content.model_dump(exclude_unset=True)

        if not values:
            return

        async with self.connect(conn) as conn:
            await conn.execute(
                update(Group).where(Group.id == group_id).values(**values)
            )

    async def delete_group(
        self, group_id: int, conn: AsyncSession | None = None
    ) -> None:
        """
        Delete the group row only. Membership edges pointing at it are kept.
        """
        async with self.connect(conn) as conn:
            await conn.execute(delete(Group).where(Group.id == group_id))

    async def add_membership(
        self, user_id: int, group_id: int, conn: AsyncSession | None = None
    ) -> None:
        """
        Insert a membership edge. Existing edges are not checked for, so
        adding the same pair twice stores it twice.
        """
        async with self.connect(conn) as conn:
            await conn.execute(
                insert(user_to_group).values(user_id=user_id, group_id=group_id)
            )

    async def remove_membership(
        self, user_id: int, group_id: int, conn: AsyncSession | None = None
    ) -> None:
        async with self.connect(conn) as conn:
            await conn.execute(
                delete(user_to_group).where(
                    user_to_group.c.user_id == user_id,
                    user_to_group.c.group_id == group_id,
                )
            )

    async def list_groups_for_user(
        self, user_id: int, conn: AsyncSession | None = None
    ) -> list[GroupData]:
        query = (
            select(Group)
            .join(user_to_group, Group.id == user_to_group.c.group_id)
            .where(user_to_group.c.user_id == user_id)
        )

        async with self.connect(conn) as conn:
            result = await conn.execute(query)
            return [g.to_core() for g in result.scalars().all()]
