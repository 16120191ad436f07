from __future__ import annotations

from dataclasses import dataclass

from .enums import Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class AuthContext:
    """Current principal, passed explicitly into every service call."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self) -> None:
        if not self.is_admin:
            raise AuthorizationError("Access denied: administrators only")

    def require_self_or_admin(self, collaborator_id: str) -> None:
        if self.is_admin:
            return
        if str(self.user_id) != str(collaborator_id):
            raise AuthorizationError("Access denied: you can only access your own timesheet")
