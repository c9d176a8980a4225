"""
Problem Schema
--------------

Every error the API returns is a "problem" body, loosely following `RFC 7807`_::

    {
        "status": 400,
        "title": "Validation Error",
        "detail": "Invalid fields in request",
        "errors": [{"field": "seatCount", "message": "Car cannot have more than 9 seats"}]
    }

The ``errors`` list is only included for validation failures.

.. _`RFC 7807`: https://tools.ietf.org/html/rfc7807
"""
from http import HTTPStatus
from typing import List, Dict, Optional

from aiohttp import web
from marshmallow import Schema, fields


class FieldErrorSchema(Schema):
    field = fields.String(required=True)
    message = fields.String(required=True)


class ProblemSchema(Schema):
    status = fields.Integer(required=True)
    title = fields.String(required=True)
    detail = fields.String(allow_none=True)
    errors = fields.List(fields.Nested(FieldErrorSchema()))


def problem_response(
    status: HTTPStatus, detail: Optional[str], *,
    title: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None
) -> web.Response:
    """
    Builds the json response for a problem.

    :param status: The status code.
    :param detail: A human readable description of what went wrong.
    :param title: A short summary, defaulting to the status phrase.
    :param errors: The per-field errors, if any.
    """
    status = HTTPStatus(status)
    problem = {
        "status": status.value,
        "title": title if title is not None else status.phrase,
        "detail": detail,
    }
    if errors:
        problem["errors"] = errors

    return web.json_response(ProblemSchema().dump(problem), status=status.value)
