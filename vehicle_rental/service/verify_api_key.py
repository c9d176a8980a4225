"""
Verify Api Key
--------------

Each role is granted by a single pre-shared key,
sent in the ``X-API-KEY`` header.
"""
import hmac

from aiohttp.web_request import Request

from vehicle_rental.config import api_key_header
from vehicle_rental.permissions.roles import Role
from vehicle_rental.service.errors import UnauthorizedError


class ApiKeyVerificationError(UnauthorizedError):
    pass


class ApiKeyVerifier:
    """
    Maps the configured api keys to their roles.
    """

    def __init__(self, admin_key: str, user_key: str):
        if not admin_key or not user_key:
            raise ValueError("Both the admin and user api keys must be set.")
        if admin_key == user_key:
            raise ValueError("The admin and user api keys must differ.")

        self._keys = ((admin_key, Role.ADMIN), (user_key, Role.USER))

    def verify(self, key: str) -> Role:
        """
        :returns: The role granted by the key.
        :raises ApiKeyVerificationError: When the key is not one of the configured keys.
        """
        for valid_key, role in self._keys:
            if hmac.compare_digest(key.encode(), valid_key.encode()):
                return role

        raise ApiKeyVerificationError("Invalid API key")


def verify_api_key(request: Request) -> Role:
    """
    Checks a request for the existence of a valid api key.

    :param request: The request to check.
    :return: The role granted by the key.
    :raises ApiKeyVerificationError: When the api key is missing or invalid.
    """
    key = request.headers.get(api_key_header)
    if not key:
        raise ApiKeyVerificationError("Missing API key")

    return request.app["api_key_verifier"].verify(key)
