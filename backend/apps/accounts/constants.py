"""
Account constants.
"""

from django.db import models


class UserRole(models.TextChoices):
    """
    Closed set of application roles carried in the identity token.

    Stored role values outside this set are read as DEFAULT.
    """

    MANAGER = "manager", "Manager"
    EMPLOYEE = "employee", "Employee"


DEFAULT_ROLE = UserRole.EMPLOYEE


def to_role(value: str | None) -> UserRole:
    """Map a stored role value onto UserRole, falling back to DEFAULT_ROLE."""
    try:
        return UserRole(value)
    except ValueError:
        return DEFAULT_ROLE
