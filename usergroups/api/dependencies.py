"""
Dependencies used by the API.
"""

from typing import Annotated

from fastapi import Depends, Request
from pydantic import BaseModel
from structlog import get_logger
from structlog.typing import FilteringBoundLogger

from usergroups.config.settings import Settings
from usergroups.core.validation import InvalidIdentifier, validate_identifier
from usergroups.service.groups import GroupService
from usergroups.service.user import UserService


def SETTINGS(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_group_service(request: Request) -> GroupService:
    return request.app.state.group_service


def logger():
    return get_logger()


class Pagination(BaseModel):
    limit: int
    offset: int


def _integer_or_default(raw: str | None, default: int, minimum: int) -> int:
    # Unparseable or out-of-range values, and values below the minimum,
    # fall back to the default rather than failing the request.
    try:
        value = validate_identifier(raw, message="")
    except InvalidIdentifier:
        return default

    return value if value >= minimum else default


def pagination(
    settings: Annotated[Settings, Depends(SETTINGS)],
    limit: str | None = None,
    offset: str | None = None,
) -> Pagination:
    return Pagination(
        limit=_integer_or_default(limit, settings.default_limit, minimum=1),
        offset=_integer_or_default(offset, settings.default_offset, minimum=0),
    )


SettingsDependency = Annotated[Settings, Depends(SETTINGS)]
UserServiceDependency = Annotated[UserService, Depends(get_user_service)]
GroupServiceDependency = Annotated[GroupService, Depends(get_group_service)]
LoggerDependency = Annotated[FilteringBoundLogger, Depends(logger)]
PaginationDependency = Annotated[Pagination, Depends(pagination)]
