"""
ORM for user information.
"""

from datetime import date

from sqlmodel import Field, SQLModel

from usergroups.core.user import Sex, UserData


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    name: str
    surname: str
    birth_date: date
    sex: Sex

    def to_core(self) -> UserData:
        return UserData(
            id=self.id,
            name=self.name,
            surname=self.surname,
            birth_date=self.birth_date,
            sex=self.sex,
        )
