"""
Validation
----------

The rules for the patch and return bodies. Unlike the create payloads,
which are plain schemas, these depend on the resource being changed.
"""
from typing import Dict, Any

from marshmallow import ValidationError

from vehicle_rental.models import User
from vehicle_rental.serializer.models import CreateUserSchema
from vehicle_rental.service.errors import BadRequestError, ValidationFailedError

USER_PATCH_FIELDS = {"firstName", "lastName", "email"}
"""The fields any user may change."""

CUSTOMER_PATCH_FIELDS = USER_PATCH_FIELDS | {"phoneNumber"}
"""Customers may also change their phone number."""

_user_patch_schema = CreateUserSchema(partial=True)


def validate_user_patch(user: User, body: Any) -> Dict[str, Any]:
    """
    Validates a patch for the given user.

    :returns: The changes, keyed by model attribute.
    :raises BadRequestError: If the body is empty, or has fields that cannot be changed.
    :raises ValidationFailedError: If a value breaks the rules for that field.
    """
    if not isinstance(body, dict) or not body:
        raise BadRequestError("Request body cannot be empty")

    allowed = CUSTOMER_PATCH_FIELDS if user.is_customer else USER_PATCH_FIELDS
    for key, value in body.items():
        if key not in allowed:
            raise BadRequestError(f"Field not allowed: {key}")
        if not isinstance(value, str):
            raise BadRequestError(f"{key} must be a string")

    try:
        return _user_patch_schema.load(body)
    except ValidationError as error:
        raise ValidationFailedError.from_messages("Invalid fields in request", error.messages) from error


def validate_rent_patch(body: Any) -> bool:
    """
    Validates a rent status patch, which may only contain ``rented``.

    :returns: The new rent status.
    :raises BadRequestError: If the body has other fields, or ``rented`` is not a boolean.
    """
    if not isinstance(body, dict) or not body:
        raise BadRequestError("Request body cannot be empty")

    for key in body:
        if key != "rented":
            raise BadRequestError(f"Field not allowed: {key}")

    if not isinstance(body.get("rented"), bool):
        raise BadRequestError("'rented' field is required and must be boolean")

    return body["rented"]


def validate_empty_body(body: Any):
    """
    Asserts that there is no body, or that it is ``null`` or ``{}``.

    :raises BadRequestError: If the body has any content.
    """
    if body is not None and body != {}:
        raise BadRequestError("Body should be empty when returning a rental.")
