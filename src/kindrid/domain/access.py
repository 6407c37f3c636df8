"""Viewer roles for the photo workflow."""

from dataclasses import dataclass, field
from enum import Enum


class UserRole(str, Enum):
    """Roles a viewer can act under."""

    TEACHER = "teacher"
    PARENT = "parent"


@dataclass(frozen=True)
class Viewer:
    """The person acting on photos, with the children they guard."""

    role: UserRole = UserRole.TEACHER
    children: frozenset[str] = field(default_factory=frozenset)


TEACHER = Viewer(role=UserRole.TEACHER)
