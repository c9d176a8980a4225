"""
Integrity
---------

Translates unique constraint violations reported by the database
into :class:`~vehicle_rental.service.errors.ConflictError`.

The message differs by backend, for example::

    UNIQUE constraint failed: vehicle.registration_number          (sqlite)
    duplicate key value violates unique constraint "user_email_key"  (postgres)
"""
import re

from tortoise.exceptions import IntegrityError

from vehicle_rental.service.errors import ConflictError

UNIQUE_COLUMNS = {
    "registration_number": "registrationNumber",
    "employee_number": "employeeNumber",
    "email": "email",
}
"""Maps the unique columns to the name of the field in the api."""

_COLUMN_PATTERN = re.compile(r"\b(?:\w+\.)?(" + "|".join(UNIQUE_COLUMNS) + r")\b|_(" + "|".join(UNIQUE_COLUMNS) + r")_")


def conflict_from_integrity_error(error: IntegrityError) -> Exception:
    """
    Gets the conflict for a unique violation, or the original
    error if it does not name one of the unique columns.
    """
    match = _COLUMN_PATTERN.search(str(error))
    if match is None:
        return error

    column = match.group(1) or match.group(2)
    return ConflictError(f"{UNIQUE_COLUMNS[column]} already exists")
