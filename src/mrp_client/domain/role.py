"""Role domain object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Role:
    """User role; permissions are managed on the backend."""

    id: int
    name: str
