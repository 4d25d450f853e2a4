"""
Authorization rules: roles and the owner-or-admin mutation check.

Everything here is pure: no database and no request objects.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Any


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


def can_mutate(requester_id: Any, requester_role: Role | str, resource_owner_id: Any) -> bool:
    """Owners may change their own resources; admins may change anything."""
    return requester_id == resource_owner_id or requester_role == Role.ADMIN


def has_role(requester_role: Role | str, allowed_roles: Iterable[Role | str]) -> bool:
    """True when ``requester_role`` is one of ``allowed_roles``."""
    return any(requester_role == role for role in allowed_roles)
