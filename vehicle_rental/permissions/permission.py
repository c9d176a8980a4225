"""
Permission
----------

A permission is an async callable that takes the request
and raises a :class:`RoutePermissionError` when it fails.
Permissions compose with ``&``, ``|`` and ``~``::

    (HasRole(Role.ADMIN) | HasRole(Role.USER)) & ~HasRole(Role.USER)
"""

from abc import ABC, abstractmethod
from itertools import chain
from typing import List

from aiohttp.web_request import Request


class RoutePermissionError(Exception):

    def __init__(self, *messages, qualifier=None, sub_errors: List['RoutePermissionError'] = None):
        """
        :param messages: The reasons the permission failed.
        :param qualifier: How the sub errors are joined ("and" / "or").
        :param sub_errors: The errors of the permissions this one is composed of.
        """
        if messages and (qualifier is not None or sub_errors is not None):
            raise ValueError("RoutePermissionError may either return a message or sub errors.")

        super().__init__(*messages)
        self.messages = messages
        self.sub_errors = sub_errors if sub_errors is not None else []
        self.qualifier = qualifier

    def __str__(self):
        """Prints a friendly description of the error."""
        if self.messages:
            return ", ".join(m.lower().strip(".") for m in self.messages)

        reasons = [str(error) for error in self.sub_errors]
        if len(reasons) > 1:
            reasons[-1] = f"{self.qualifier} {reasons[-1]}"
        return ", ".join(reasons)

    def serialize(self) -> List[str]:
        """Flattens the messages of the error and its sub errors."""
        return list(self.messages) + list(chain.from_iterable(err.serialize() for err in self.sub_errors))


class Permission(ABC):
    """
    The base class for permissions. Implements the boolean logic.
    """

    def __and__(self, other: 'Permission') -> 'Permission':
        return AndPermission(*AndPermission.flatten(self, other))

    def __or__(self, other: 'Permission') -> 'Permission':
        return OrPermission(*OrPermission.flatten(self, other))

    def __invert__(self) -> 'Permission':
        return NotPermission(self)

    @abstractmethod
    async def __call__(self, request: Request) -> None:
        """
        Evaluates the permission against a request.

        :raises RoutePermissionError: If the permission failed.
        """


class CompositePermission(Permission, ABC):
    """A permission made up of other permissions, joined by an operator."""

    operator: str

    def __init__(self, *permissions: Permission):
        self._permissions = permissions

    @classmethod
    def flatten(cls, *permissions: Permission) -> List[Permission]:
        """Merges nested permissions of the same kind, so that ``a & b & c`` is a single level."""
        flat = []
        for permission in permissions:
            if isinstance(permission, cls):
                flat += permission._permissions
            else:
                flat.append(permission)
        return flat

    def __repr__(self):
        return "(" + f" {self.operator} ".join(repr(p) for p in self._permissions) + ")"

    def __len__(self):
        return len(self._permissions)


class AndPermission(CompositePermission):
    """Passes when every sub permission passes."""

    operator = "&"

    async def __call__(self, request):
        errors = []

        for permission in self._permissions:
            try:
                await permission(request)
            except RoutePermissionError as error:
                errors.append(error)

        if errors:
            raise RoutePermissionError(qualifier="and", sub_errors=errors)


class OrPermission(CompositePermission):
    """Passes when any sub permission passes."""

    operator = "|"

    async def __call__(self, request):
        errors = []

        for permission in self._permissions:
            try:
                await permission(request)
            except RoutePermissionError as error:
                errors.append(error)
            else:
                return

        raise RoutePermissionError(qualifier="or", sub_errors=errors)


class NotPermission(Permission):

    def __init__(self, permission: Permission):
        self._permission = permission

    async def __call__(self, request):
        try:
            await self._permission(request)
        except RoutePermissionError:
            return

        raise RoutePermissionError(f"Permission {self._permission!r} passed, but is inverted.")

    def __repr__(self):
        return f"~{self._permission!r}"
