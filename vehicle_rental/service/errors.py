"""
Errors
------

The errors raised by the service layer. Each error carries the HTTP status
and title it is reported with, so that the API can translate them in one
place (see :func:`~vehicle_rental.middleware.error_middleware`).
"""
from http import HTTPStatus
from typing import List, Dict, Optional


class ServiceError(Exception):
    """The base class for all errors that are reported to the caller."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    @property
    def title(self) -> str:
        return self.status.phrase


class NotFoundError(ServiceError):
    """The requested resource does not exist."""

    status = HTTPStatus.NOT_FOUND


class BadRequestError(ServiceError):
    """The request is malformed, or asks for an invalid state transition."""

    status = HTTPStatus.BAD_REQUEST


class ValidationFailedError(BadRequestError):
    """One or more fields failed validation."""

    def __init__(self, detail: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(detail)
        self.errors = errors if errors is not None else []

    @property
    def title(self) -> str:
        return "Validation Error"

    @classmethod
    def from_messages(cls, detail: str, messages) -> 'ValidationFailedError':
        """
        Creates the error from a marshmallow error dictionary.

        :param detail: The human readable summary.
        :param messages: A mapping of field names to lists of messages.
        """
        errors = []
        if isinstance(messages, dict):
            for field, field_messages in messages.items():
                if not isinstance(field_messages, (list, tuple)):
                    field_messages = [field_messages]
                errors += [{"field": field, "message": str(message)} for message in field_messages]
        else:
            errors += [{"field": "_schema", "message": str(message)} for message in messages]
        return cls(detail, errors)


class ConflictError(ServiceError):
    """The request conflicts with the current state, such as a duplicate unique value."""

    status = HTTPStatus.CONFLICT


class UnknownTypeError(BadRequestError):
    """The type discriminator is not one of the known variants."""

    def __init__(self, type_name):
        super().__init__(f"Unknown type: {type_name}")
        self.type_name = type_name


class UnauthorizedError(ServiceError):
    """The request did not carry valid credentials."""

    status = HTTPStatus.UNAUTHORIZED


class ForbiddenError(ServiceError):
    """The caller is not allowed to do this."""

    status = HTTPStatus.FORBIDDEN
