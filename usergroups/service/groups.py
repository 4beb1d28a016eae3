"""
Service layer for groups.
"""

from structlog.typing import FilteringBoundLogger

from usergroups.core.group import GroupData
from usergroups.core.models import GroupContent, UpdateGroupContent
from usergroups.database.group_store import GroupStore


class GroupService:
    """
    Group operations. There are no extra rules here: in particular deleting
    a group does not remove its membership edges, unlike deleting a user.
    """

    store: GroupStore

    def __init__(self, store: GroupStore):
        self.store = store

    async def list_all(self, log: FilteringBoundLogger) -> list[GroupData]:
        groups = await self.store.list_groups()
        await log.adebug("group.listed", number_of_groups=len(groups))
        return groups

    async def read_by_id(
        self, group_id: int, log: FilteringBoundLogger
    ) -> GroupData | None:
        """
        Read a group by its ID.

        Parameters
        ----------
        group_id: int
            The ID of the group to read.
        log: FilteringBoundLogger
            Logger instance.

        Returns
        -------
        GroupData | None
            The group, or None if no group has this ID.
        """
        log = log.bind(group_id=group_id)
        group = await self.store.get_group_by_id(group_id)

        if group is None:
            await log.ainfo("group.not_found")
        else:
            await log.adebug("group.found")

        return group

    async def create(self, content: GroupContent, log: FilteringBoundLogger) -> int:
        log = log.bind(group_name=content.name)
        group_id = await self.store.insert_group(content)
        await log.ainfo("group.created", group_id=group_id)
        return group_id

    async def update(
        self, group_id: int, content: UpdateGroupContent, log: FilteringBoundLogger
    ) -> None:
        log = log.bind(group_id=group_id)
        await self.store.replace_group(group_id, content)
        await log.ainfo("group.updated")

    async def delete(self, group_id: int, log: FilteringBoundLogger) -> None:
        log = log.bind(group_id=group_id)
        await self.store.delete_group(group_id)
        await log.ainfo("group.deleted")

    async def add_member(
        self, user_id: int, group_id: int, log: FilteringBoundLogger
    ) -> None:
        """
        Add a membership edge. Neither the user nor the group is checked for
        existence and duplicate edges are not prevented.
        """
        log = log.bind(group_id=group_id, user_id=user_id)
        await self.store.add_membership(user_id, group_id)
        await log.ainfo("group.user_added")

    async def remove_member(
        self, user_id: int, group_id: int, log: FilteringBoundLogger
    ) -> None:
        log = log.bind(group_id=group_id, user_id=user_id)
        await self.store.remove_membership(user_id, group_id)
        await log.ainfo("group.user_removed")

    async def list_for_user(
        self, user_id: int, log: FilteringBoundLogger
    ) -> list[GroupData]:
        log = log.bind(user_id=user_id)
        groups = await self.store.list_groups_for_user(user_id)
        await log.adebug("group.listed_for_user", number_of_groups=len(groups))
        return groups
