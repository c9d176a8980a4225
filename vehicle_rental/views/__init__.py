"""
This package contains the server API for managing
vehicles, users and the rentals between them.

API Conventions
---------------

The API conforms as best as possible to the REST standard. In short, the api must:

* Be ordered in terms of resources (nouns such as vehicle)
* Accept and return JSON with camelCase key naming
* Have idempotent GET, PATCH, and DELETE operations

API Expected Responses
----------------------

The server responds with the resource (or a list of them) as plain JSON.
DELETE requests respond with a 204 no content. Errors are reported as
a problem, see :mod:`vehicle_rental.serializer.problem`.
"""

import aiohttp_cors
from aiohttp.abc import Application

from vehicle_rental import logger
from vehicle_rental.config import cors_allowed_origins, cors_allowed_methods, cors_allowed_headers
from .rentals import RentalsView, RentalView, RentalReturnView, UserRentalHistoryView, VehicleRentalHistoryView
from .users import UsersView, UserTypeView, UserView
from .vehicles import VehiclesView, VehicleTypeView, VehicleView, VehicleRentView

views = [
    VehiclesView, VehicleTypeView, VehicleView, VehicleRentView,
    UsersView, UserTypeView, UserView,
    RentalsView, RentalView, RentalReturnView, UserRentalHistoryView, VehicleRentalHistoryView,
]


def register_views(app: Application, base: str):
    """
    Registers all the API views onto the given router at a specific root url.

    :param app: The app to register the views to.
    :param base: The base URL.
    """
    options = aiohttp_cors.ResourceOptions(
        allow_credentials=False,
        expose_headers="*",
        allow_headers=cors_allowed_headers,
        allow_methods=cors_allowed_methods,
    )
    cors = aiohttp_cors.setup(app, defaults={origin: options for origin in cors_allowed_origins})

    for view in views:
        logger.info("Registered %s at %s", view.__name__, base + view.url)
        view.register_route(app, base)
        view.enable_cors(cors)
