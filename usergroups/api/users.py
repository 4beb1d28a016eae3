"""
User management.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from usergroups.core.models import MessageResponse
from usergroups.core.user import UserData
from usergroups.core.validation import (
    validate_create_payload,
    validate_update_payload,
    validate_user_id,
)
from usergroups.database.store import StoreError
from usergroups.service.user import DuplicateUser

from .dependencies import (
    LoggerDependency,
    PaginationDependency,
    UserServiceDependency,
)
from .errors import error_response

user_app = APIRouter(tags=["User Management"])

RequestBody = Annotated[Any, Body()]


@user_app.get("/", summary="Check that the server is up")
async def home(log: LoggerDependency) -> MessageResponse:
    await log.adebug("api.home")
    return MessageResponse(message="Welcome Home")


@user_app.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    description=(
        "Create a user from its name, surname, birth date and sex. "
        "A user identical in all four fields must not exist already. "
        "Returns the identifier of the new user."
    ),
    responses={
        201: {"description": "User created, the body is its identifier."},
        400: {"description": "Invalid payload."},
        500: {"description": "User already exists, or the database failed."},
    },
)
async def create_user(
    service: UserServiceDependency,
    log: LoggerDependency,
    body: RequestBody = None,
) -> int:
    content = validate_create_payload(body)

    try:
        user_id = await service.create(content, log=log)
    except (DuplicateUser, StoreError) as e:
        # The underlying message is forwarded on this endpoint only.
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    await log.ainfo("api.user.created", user_id=user_id)

    return user_id


@user_app.get(
    "/users/{user_id}",
    summary="Get user by ID",
    responses={
        200: {"description": "User details."},
        400: {"description": "Invalid user ID."},
        404: {"description": "User not found."},
    },
)
async def get_user(
    user_id: str, service: UserServiceDependency, log: LoggerDependency
) -> UserData:
    identifier = validate_user_id(user_id)
    user = await service.read_by_id(identifier, log=log)

    if user is None:
        return error_response(status.HTTP_404_NOT_FOUND, "User not found")

    return user


@user_app.get(
    "/users",
    summary="List users",
    description="List users, `limit` (default 10) at a time from `offset`.",
    responses={
        200: {"description": "List of users."},
        404: {"description": "No users in the requested range."},
    },
)
async def list_users(
    page: PaginationDependency,
    service: UserServiceDependency,
    log: LoggerDependency,
) -> list[UserData]:
    users = await service.list_all(page.limit, page.offset, log=log)

    if not users:
        return error_response(status.HTTP_404_NOT_FOUND, "User list is empty")

    return users


@user_app.put(
    "/users/{user_id}",
    status_code=status.HTTP_201_CREATED,
    summary="Update a user",
    description=(
        "Overwrite the fields present in the payload. Fields that are not "
        "sent keep their current value. The validated payload is echoed back."
    ),
    responses={
        201: {"description": "User updated."},
        400: {"description": "Invalid user ID or payload."},
    },
)
async def update_user(
    user_id: str,
    service: UserServiceDependency,
    log: LoggerDependency,
    body: RequestBody = None,
) -> dict[str, Any]:
    identifier = validate_user_id(user_id)
    content = validate_update_payload(body)

    await service.update(identifier, content, log=log)

    return content.model_dump(mode="json", exclude_unset=True)


@user_app.delete(
    "/users/{user_id}",
    summary="Delete a user",
    description="Delete a user together with all of their group memberships.",
    responses={
        200: {"description": "User deleted."},
        400: {"description": "Invalid user ID."},
    },
)
async def delete_user(
    user_id: str, service: UserServiceDependency, log: LoggerDependency
) -> MessageResponse:
    identifier = validate_user_id(user_id)

    await service.delete(identifier, log=log)

    return MessageResponse(message=f"User with id {identifier} deleted successfully")


@user_app.get(
    "/{group_name}/users",
    summary="List users in a group",
    description=(
        "List the members of the group(s) named `group_name`. "
        "An empty list is a successful response."
    ),
)
async def list_users_by_group(
    group_name: str,
    page: PaginationDependency,
    service: UserServiceDependency,
    log: LoggerDependency,
) -> list[UserData]:
    return await service.list_by_group(group_name, page.limit, page.offset, log=log)
