"""
Validation of identifiers and request payloads, applied before anything
reaches the service layer.
"""

import re
from typing import Any

import pydantic

from .models import (
    CreateUserContent,
    GroupContent,
    UpdateGroupContent,
    UpdateUserContent,
)
from .user import Sex

ERROR_USER_ID = "Error User ID is not valid"
ERROR_GROUP_ID = "Error Group ID is not valid"

# Leading whitespace, an optional sign, then at least one ASCII digit.
# Anything after the digits is ignored.
_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")

# Identifiers are stored in signed 64-bit integer columns.
IDENTIFIER_MIN = -(2**63)
IDENTIFIER_MAX = 2**63 - 1

_EXPECTED = {
    "name": "must be a string",
    "surname": "must be a string",
    "birth_date": "must be a valid date",
    "sex": f"must be one of [{', '.join(s.value for s in Sex)}]",
}


class ValidationError(Exception):
    """
    Malformed or missing input. Always caused by the caller.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdentifier(ValidationError):
    pass


def validate_identifier(raw: Any, message: str) -> int:
    """
    Parse a textual identifier as a base-10 integer.

    Parameters
    ----------
    raw: Any
        The identifier as received, usually a path parameter.
    message: str
        Message carried by the error when parsing fails.

    Raises
    ------
    InvalidIdentifier
        If `raw` does not start with a base-10 integer, or that integer
        does not fit a signed 64-bit column.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidIdentifier(message)

    match = _LEADING_INTEGER.match(str(raw))

    if match is None:
        raise InvalidIdentifier(message)

    value = int(match.group(1))

    if not IDENTIFIER_MIN <= value <= IDENTIFIER_MAX:
        raise InvalidIdentifier(message)

    return value


def validate_user_id(raw: Any) -> int:
    return validate_identifier(raw, ERROR_USER_ID)


def validate_group_id(raw: Any) -> int:
    return validate_identifier(raw, ERROR_GROUP_ID)


def _describe(error: dict) -> str:
    field = str(error["loc"][0]) if error["loc"] else "value"

    match error["type"]:
        case "missing":
            return f'"{field}" is required'
        case "string_too_short":
            return f'"{field}" is not allowed to be empty'
        case "extra_forbidden":
            return f'"{field}" is not allowed'
        case "model_type" | "model_attributes_type" | "dict_type":
            return '"value" must be of type object'
        case _:
            return f'"{field}" {_EXPECTED.get(field, "is not valid")}'


def _validate(model: type[pydantic.BaseModel], body: Any):
    if not isinstance(body, dict):
        raise ValidationError('"value" must be of type object')

    try:
        return model.model_validate(body)
    except pydantic.ValidationError as e:
        # Only the first offending field is reported.
        raise ValidationError(_describe(e.errors()[0])) from e


def validate_create_payload(body: Any) -> CreateUserContent:
    """
    Validate the payload for a new user. All of `name`, `surname`,
    `birth_date` and `sex` are required.

    Raises
    ------
    ValidationError
        Naming the first field that is missing or has the wrong type.
    """
    return _validate(CreateUserContent, body)


def validate_update_payload(body: Any) -> UpdateUserContent:
    """
    Validate the payload for a user update. The same typing rules apply as
    for creation but every field is optional, so an empty object is valid.
    """
    return _validate(UpdateUserContent, body)


def validate_group_payload(body: Any) -> GroupContent:
    return _validate(GroupContent, body)


def validate_group_update_payload(body: Any) -> UpdateGroupContent:
    return _validate(UpdateGroupContent, body)


def validate_membership_payload(body: Any) -> int:
    """
    Extract and validate the `userId` carried by a membership request.
    """
    if not isinstance(body, dict):
        raise InvalidIdentifier(ERROR_USER_ID)

    return validate_user_id(body.get("userId"))
