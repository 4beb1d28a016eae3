"""
Group management.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response, status

from usergroups.core.group import GroupData
from usergroups.core.models import GroupCreatedResponse
from usergroups.core.validation import (
    validate_group_id,
    validate_group_payload,
    validate_group_update_payload,
    validate_membership_payload,
    validate_user_id,
)

from .dependencies import GroupServiceDependency, LoggerDependency
from .errors import error_response

group_app = APIRouter(tags=["Group Management"])

RequestBody = Annotated[Any, Body()]


@group_app.get(
    "/groups",
    summary="List all groups",
    responses={200: {"description": "List of groups."}},
)
async def list_groups(
    service: GroupServiceDependency, log: LoggerDependency
) -> list[GroupData]:
    return await service.list_all(log=log)


@group_app.get(
    "/groups/{group_id}",
    summary="Get group by ID",
    responses={
        200: {"description": "Group details."},
        400: {"description": "Invalid group ID."},
        404: {"description": "Group not found."},
    },
)
async def get_group_by_id(
    group_id: str, service: GroupServiceDependency, log: LoggerDependency
) -> GroupData:
    identifier = validate_group_id(group_id)
    group = await service.read_by_id(identifier, log=log)

    if group is None:
        return error_response(status.HTTP_404_NOT_FOUND, "Group not found")

    return group


@group_app.post(
    "/groups",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new group",
    responses={
        201: {"description": "Group created successfully."},
        400: {"description": "Invalid input data."},
    },
)
async def create_group(
    service: GroupServiceDependency,
    log: LoggerDependency,
    body: RequestBody = None,
) -> GroupCreatedResponse:
    content = validate_group_payload(body)
    group_id = await service.create(content, log=log)
    return GroupCreatedResponse(id=group_id)


@group_app.put(
    "/groups/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a group",
    responses={
        204: {"description": "Group updated."},
        400: {"description": "Invalid group ID or payload."},
    },
)
async def update_group(
    group_id: str,
    service: GroupServiceDependency,
    log: LoggerDependency,
    body: RequestBody = None,
) -> Response:
    identifier = validate_group_id(group_id)
    content = validate_group_update_payload(body)
    await service.update(identifier, content, log=log)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@group_app.delete(
    "/groups/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a group",
    description=(
        "Delete a group by its ID. Membership records of the group are "
        "left untouched."
    ),
    responses={
        204: {"description": "Group deleted successfully."},
        400: {"description": "Invalid group ID."},
    },
)
async def delete_group(
    group_id: str, service: GroupServiceDependency, log: LoggerDependency
) -> Response:
    identifier = validate_group_id(group_id)
    await service.delete(identifier, log=log)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@group_app.post(
    "/groups/{group_id}/users",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Add a user to a group",
    description="The body carries the user to add as `{\"userId\": <id>}`.",
    responses={
        204: {"description": "Member added."},
        400: {"description": "Invalid group or user ID."},
    },
)
async def add_user_to_group(
    group_id: str,
    service: GroupServiceDependency,
    log: LoggerDependency,
    body: RequestBody = None,
) -> Response:
    identifier = validate_group_id(group_id)
    user_id = validate_membership_payload(body)
    await service.add_member(user_id, identifier, log=log)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@group_app.delete(
    "/groups/{group_id}/users",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a user from a group",
    description=(
        "The body carries the user to remove as `{\"userId\": <id>}`. "
        "Removing a membership that does not exist is not an error."
    ),
    responses={
        204: {"description": "Member removed."},
        400: {"description": "Invalid group or user ID."},
    },
)
async def remove_user_from_group(
    group_id: str,
    service: GroupServiceDependency,
    log: LoggerDependency,
    body: RequestBody = None,
) -> Response:
    identifier = validate_group_id(group_id)
    user_id = validate_membership_payload(body)
    await service.remove_member(user_id, identifier, log=log)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@group_app.get(
    "/{user_id}/groups",
    summary="List the groups of a user",
    responses={
        200: {"description": "List of groups."},
        400: {"description": "Invalid user ID."},
    },
)
async def list_groups_by_user(
    user_id: str, service: GroupServiceDependency, log: LoggerDependency
) -> list[GroupData]:
    identifier = validate_user_id(user_id)
    return await service.list_for_user(identifier, log=log)
