"""
FastAPI app
"""

from contextlib import asynccontextmanager
from importlib.metadata import version

from fastapi import FastAPI
from structlog import get_logger

from usergroups.config.managers import AsyncSessionManager
from usergroups.config.settings import Settings
from usergroups.database.group_store import GroupStore
from usergroups.database.user_store import UserStore
from usergroups.service.groups import GroupService
from usergroups.service.user import UserService

from .errors import add_exception_handlers
from .groups import group_app
from .users import user_app


def create_app(
    settings: Settings | None = None,
    manager: AsyncSessionManager | None = None,
) -> FastAPI:
    """
    Build the application. The session manager is created from `settings`
    unless one is given, and is shared by the user and group stores.
    """
    settings = settings or Settings()
    manager = manager or settings.async_manager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log = get_logger().bind(database_type=settings.database_type)

        if settings.create_tables:
            await manager.create_all()
            await log.ainfo("api.startup.tables_created")

        await log.ainfo("api.startup")

        yield

        await manager.dispose()
        await log.ainfo("api.shutdown")

    app = FastAPI(
        lifespan=lifespan,
        title="User Groups API",
        summary="CRUD endpoints for users, groups and their memberships.",
        version=version("usergroups"),
    )

    app.state.settings = settings
    app.state.user_service = UserService(store=UserStore(manager))
    app.state.group_service = GroupService(store=GroupStore(manager))

    app = add_exception_handlers(app)

    app.include_router(user_app)
    app.include_router(group_app)

    return app
