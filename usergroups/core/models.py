"""
Pydantic models for request/responses to APIs.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .user import Sex


class CreateUserContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    birth_date: date
    sex: Sex


class UpdateUserContent(BaseModel):
    """
    Every field is optional; only the fields that were sent are written.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    surname: str | None = Field(default=None, min_length=1)
    birth_date: date | None = None
    sex: Sex | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Omitting a field is allowed, sending it as null is not.
        if value is None:
            raise ValueError("null is not a valid value")
        return value


class GroupContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)


class UpdateGroupContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("null is not a valid value")
        return value


class GroupCreatedResponse(BaseModel):
    id: int
    message: str = "Group created successfully"


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
