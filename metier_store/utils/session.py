# metier_store/utils/session.py
# Role-based access checks on an explicit session object.
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


ROUTE_PERMISSIONS = {
    "/": "public",
    "/products": "customer",
    "/admin": "admin",
    "/admin/*": "admin",
    "/orders": "admin",
    "/cart": "customer",
    "/checkout": "customer",
}


def _permission_for(path: str) -> str:
    if path in ROUTE_PERMISSIONS:
        return ROUTE_PERMISSIONS[path]
    for pattern, permission in ROUTE_PERMISSIONS.items():
        if pattern.endswith("/*") and path.startswith(pattern[:-1]):
            return permission
    return "public"


@dataclass
class SessionContext:
    role: Optional[Role] = None
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_role(cls, role: Optional[str], session_id: Optional[str] = None) -> "SessionContext":
        try:
            parsed = Role(role) if role else None
        except ValueError:
            parsed = None
        if session_id:
            return cls(role=parsed, session_id=session_id)
        return cls(role=parsed)

    @property
    def is_authenticated(self) -> bool:
        return self.role is not None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_customer(self) -> bool:
        return self.role == Role.CUSTOMER

    def has_role(self, role: Role) -> bool:
        return self.role == role

    @property
    def display_name(self) -> str:
        if self.role == Role.ADMIN:
            return "Admin"
        if self.role == Role.CUSTOMER:
            return "Customer"
        return "Guest"

    def can_access_admin(self) -> bool:
        return self.is_admin

    def can_access_customer(self) -> bool:
        # admins may use customer features too
        return self.is_authenticated

    def can_access_route(self, path: str) -> bool:
        permission = _permission_for(path)
        if permission == "public":
            return True
        if permission == "customer":
            return self.can_access_customer()
        if permission == "admin":
            return self.can_access_admin()
        return False

    def logout(self) -> None:
        self.role = None

    def headers(self) -> dict:
        headers = {"X-Session-Id": self.session_id}
        if self.role is not None:
            headers["X-Role"] = self.role.value
        return headers
