"""
Service layer for users
"""

from structlog.typing import FilteringBoundLogger

from usergroups.core.models import CreateUserContent, UpdateUserContent
from usergroups.core.user import UserData
from usergroups.database.user_store import UserStore


class DuplicateUser(Exception):
    pass


class UserService:
    """
    Business rules for users on top of a `UserStore`: no two users may share
    the same name, surname, birth date and sex, and deleting a user removes
    their group memberships.
    """

    store: UserStore

    def __init__(self, store: UserStore):
        self.store = store

    async def create(
        self, content: CreateUserContent, log: FilteringBoundLogger
    ) -> int:
        """
        Create a user if no identical one exists.

        Parameters
        ----------
        content: CreateUserContent
            The validated user payload.
        log: FilteringBoundLogger
            Logger instance.

        Returns
        -------
        int
            The identifier assigned to the new user.

        Raises
        ------
        DuplicateUser
            If a user with the same name, surname, birth date and sex exists.
        usergroups.database.store.StoreError
            If the backend fails.
        """
        log = log.bind(name=content.name, surname=content.surname)

        # The duplicate check and the insert share one transaction.
        async with self.store.transaction() as conn:
            existing = await self.store.find_users_by_fields(content, conn=conn)

            if existing:
                log = log.bind(existing_user_id=existing[0].id)
                await log.ainfo("user.create.exists")
                raise DuplicateUser("User already exists")

            user_id = await self.store.insert_user(content, conn=conn)

        await log.ainfo("user.created", user_id=user_id)

        return user_id

    async def read_by_id(
        self, user_id: int, log: FilteringBoundLogger
    ) -> UserData | None:
        log = log.bind(user_id=user_id)
        user = await self.store.get_user_by_id(user_id)

        if user is None:
            await log.ainfo("user.not_found")
        else:
            await log.adebug("user.found")

        return user

    async def list_all(
        self, limit: int, offset: int, log: FilteringBoundLogger
    ) -> list[UserData]:
        users = await self.store.list_users(limit, offset)
        await log.adebug(
            "user.listed", limit=limit, offset=offset, number_of_users=len(users)
        )
        return users

    async def list_by_group(
        self, group_name: str, limit: int, offset: int, log: FilteringBoundLogger
    ) -> list[UserData]:
        users = await self.store.list_users_by_group(group_name, limit, offset)
        await log.adebug(
            "user.listed_by_group",
            group_name=group_name,
            limit=limit,
            offset=offset,
            number_of_users=len(users),
        )
        return users

    async def update(
        self, user_id: int, content: UpdateUserContent, log: FilteringBoundLogger
    ) -> None:
        """
        Write the fields that were sent. Updating an unknown user is a no-op.
        """
        log = log.bind(
            user_id=user_id, fields=sorted(content.model_dump(exclude_unset=True))
        )
        await self.store.replace_user(user_id, content)
        await log.ainfo("user.updated")

    async def delete(self, user_id: int, log: FilteringBoundLogger) -> None:
        """
        Deletes the user's membership edges, then the user itself, in a
        single transaction.
        """
        log = log.bind(user_id=user_id)

        async with self.store.transaction() as conn:
            await self.store.delete_memberships_for_user(user_id, conn=conn)
            await self.store.delete_user(user_id, conn=conn)

        await log.ainfo("user.deleted")
