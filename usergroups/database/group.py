"""
Group ORM and the user-to-group membership table.
"""

from sqlalchemy import Column, Integer, Table
from sqlmodel import Field, SQLModel

from usergroups.core.group import GroupData

# Membership edges have no identity of their own: no primary key, no
# uniqueness and no foreign keys, so deleting a group leaves its edges in
# place and the same pair may be inserted twice.
user_to_group = Table(
    "user_to_group",
    SQLModel.metadata,
    Column("user_id", Integer, nullable=False, index=True),
    Column("group_id", Integer, nullable=False, index=True),
)


class Group(SQLModel, table=True):
    __tablename__ = "user_groups"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(index=True)

    def to_core(self) -> GroupData:
        """
        Convert this Group ORM object to a GroupData core object.
        """
        return GroupData(id=self.id, name=self.name)
