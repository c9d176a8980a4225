"""
Decorators
----------

This module defines some decorators that significantly reduce
the boilerplate when handling JSON IO. These are used on the
routes of the system to gracefully serialize, deserialize, and
validate the data coming in and out of the app.

Failures are raised as :mod:`~vehicle_rental.service.errors` and
rendered by the error middleware, so the routes only see valid data.

.. note:: Annotating a route with ``@expects(None)`` or ``@returns(None)``
    is purely for clarity and has no effect. It may however make the
    route definitions easier to read.
"""

from functools import wraps
from http import HTTPStatus
from json import JSONDecodeError
from typing import Optional

from aiohttp import web
from aiohttp.web_urldispatcher import View
from marshmallow import Schema, ValidationError

from vehicle_rental.service.errors import BadRequestError, ValidationFailedError


async def read_json(request: web.Request):
    """
    Reads the JSON body of the request.

    :returns: The decoded body, or None if there is no body.
    :raises BadRequestError: If the body is not JSON or cannot be parsed.
    """
    if not request.body_exists:
        return None

    if request.content_type != "application/json":
        raise BadRequestError(f"This route ({request.method}: {request.rel_url}) only accepts JSON.")

    text = await request.text()
    if not text.strip():
        return None

    try:
        return await request.json()
    except JSONDecodeError as err:
        raise BadRequestError(f"Could not parse supplied JSON: {err.msg}") from err


def expects(schema: Optional[Schema], into="data"):
    """
    A decorator that asserts that the JSON data supplied
    to the route validates the given :class:`~marshmallow.Schema`.

    If the data is valid, it is stored on the request under the key
    supplied to the ``into`` parameter.

    .. code:: python

        @expects(CreateVehicleSchema(), "my_data")
        async def post(self):
            valid_data = self.request["my_data"]

    :param schema: The schema to validate.
    :param into: The key to store the validated data in.
    """

    # if schema is none, then bypass the decorator
    if schema is None:
        return lambda x: x

    if not isinstance(schema, Schema):
        raise TypeError

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            body = await read_json(self.request)
            if body is None:
                raise BadRequestError("Request body cannot be empty")
            if not isinstance(body, dict):
                raise BadRequestError("Request body must be a JSON object")

            try:
                self.request[into] = schema.load(body)
            except ValidationError as err:
                raise ValidationFailedError.from_messages("Invalid fields in request", err.messages) from err

            return await original_function(self, **kwargs)

        return new_func

    return decorator


def expects_json(into="data"):
    """
    A decorator that stores the raw JSON body on the request, for routes
    whose rules depend on the target resource and are checked by the route.

    A missing body is stored as None.

    :param into: The key to store the decoded body in.
    """

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            self.request[into] = await read_json(self.request)
            return await original_function(self, **kwargs)

        return new_func

    return decorator


def returns(schema: Optional[Schema] = None, return_code: HTTPStatus = HTTPStatus.OK):
    """
    A decorator that dumps the data returned from the route
    into the given :class:`~marshmallow.Schema`.

    As long as this decorator is applied to the route,
    it is possible to return plain models and python dictionaries.

    .. code:: python

        @returns(VehicleSchema(many=True))
        async def get(self):
            return await get_vehicles()

    :param schema: The schema that the output data must conform to
    :param return_code: The code to return
    """

    # if no schema is defined, pass through
    if schema is None:
        return lambda x: x

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            response_data = await original_function(self, **kwargs)
            return web.json_response(schema.dump(response_data), status=return_code)

        return new_func

    return decorator
