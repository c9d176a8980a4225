"""
Policy
------

The access policy is an ordered table of rules. Each request is
matched against the rules in order, and the first rule that matches
the method and path decides. A request that matches no rule is denied.
"""
from typing import Optional, Iterable, List

from aiohttp.web_request import Request

from vehicle_rental import logger
from vehicle_rental.permissions.permission import Permission, RoutePermissionError
from vehicle_rental.permissions.roles import Role, HasRole
from vehicle_rental.service.errors import ForbiddenError


class AccessRule:
    """
    Applies a permission to a path and everything below it.

    :param methods: The methods the rule applies to, or None for all of them.
    :param path: The path the rule applies to, eg. ``/api/vehicles``.
    :param permission: The permission the request must satisfy.
    """

    def __init__(self, methods: Optional[Iterable[str]], path: str, permission: Permission):
        self.methods = frozenset(method.upper() for method in methods) if methods is not None else None
        self.path = path.rstrip("/")
        self.permission = permission

    def matches(self, method: str, path: str) -> bool:
        if self.methods is not None and method.upper() not in self.methods:
            return False
        return path == self.path or path.startswith(self.path + "/")

    def __repr__(self):
        methods = ",".join(sorted(self.methods)) if self.methods is not None else "*"
        return f"AccessRule({methods} {self.path}/** -> {self.permission!r})"


class AccessPolicy:

    def __init__(self, rules: List[AccessRule]):
        self.rules = rules

    def match(self, method: str, path: str) -> Optional[AccessRule]:
        return next((rule for rule in self.rules if rule.matches(method, path)), None)

    async def authorize(self, request: Request):
        """
        Checks the request against the first matching rule.

        :raises ForbiddenError: If the rule's permission fails, or no rule matches.
        """
        rule = self.match(request.method, request.path)
        if rule is None:
            logger.warning("Denied %s %s, no access rule matches", request.method, request.path)
            raise ForbiddenError("Access denied")

        try:
            await rule.permission(request)
        except RoutePermissionError as error:
            logger.warning("Denied %s %s: %s", request.method, request.path, error)
            raise ForbiddenError(f"Access denied: {error}") from error


def default_policy(api_root: str) -> AccessPolicy:
    """The rules for the vehicle rental api."""
    admin = HasRole(Role.ADMIN)
    user = HasRole(Role.USER)

    return AccessPolicy([
        AccessRule(["GET", "HEAD"], f"{api_root}/vehicles", user | admin),
        AccessRule(["POST", "PATCH", "DELETE"], f"{api_root}/vehicles", admin),
        AccessRule(None, f"{api_root}/users", admin),
        AccessRule(None, f"{api_root}/rentals", admin),
    ])
