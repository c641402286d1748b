"""User domain object."""

from dataclasses import dataclass
from typing import Optional

from .role import Role


@dataclass(frozen=True)
class User:
    """Backend user account.

    Attributes:
        id: Backend identifier
        first_name: Given name
        last_name: Family name
        email: Login email
        phone: Contact phone, empty when unset
        active: Account status; deactivated users cannot log in
        available: Whether the user can be assigned to production work
        role: Assigned role, if any
    """

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    active: bool = True
    available: bool = True
    role: Optional[Role] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
