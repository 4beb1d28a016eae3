"""
Core group data models.
"""

from pydantic import BaseModel


class GroupData(BaseModel):
    id: int
    name: str
