"""
This module contains the access control for the api. A permission is
an object that can be called asynchronously with the request, and raises
a :class:`~vehicle_rental.permissions.permission.RoutePermissionError`
in the case of a failed permission.
"""

from vehicle_rental.permissions.permission import Permission, RoutePermissionError
from vehicle_rental.permissions.policy import AccessRule, AccessPolicy, default_policy
from vehicle_rental.permissions.roles import Role, HasRole
