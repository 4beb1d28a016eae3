"""
Meta functionality for the database.
"""

from .group import Group, user_to_group
from .user import User

ALL_TABLES = (
    User,
    Group,
    user_to_group,
)
