"""
A shared user object that is serialized.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel


class Sex(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class UserData(BaseModel):
    id: int
    name: str
    surname: str
    birth_date: date
    sex: Sex
