"""
Roles
-----

Every api key grants exactly one role, which is stored
on the request by the :func:`~vehicle_rental.middleware.api_key_middleware`.
"""
from enum import Enum

from aiohttp.web_request import Request

from vehicle_rental.permissions.permission import Permission, RoutePermissionError


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class HasRole(Permission):
    """Asserts that the caller was granted the given role."""

    def __init__(self, role: Role):
        self.role = role

    async def __call__(self, request: Request):
        if request.get("role") is not self.role:
            raise RoutePermissionError(f"The {self.role.value} role is required.")

    def __repr__(self):
        return f"HasRole({self.role.value})"
