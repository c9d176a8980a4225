"""
Rental Related Views
---------------------------

Handles all the rentals CRUD, along with returning a rental.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from vehicle_rental.serializer.decorators import expects, expects_json, returns
from vehicle_rental.serializer.models import RentalSchema, CreateRentalSchema
from vehicle_rental.service.validation import validate_empty_body
from vehicle_rental.views.base import BaseView
from vehicle_rental.views.decorators import url_id


class RentalsView(BaseView):
    """
    Gets the list of rentals, or rents out a vehicle.
    """
    url = "/rentals"
    name = "rentals"

    @docs(summary="Get All Rentals")
    @returns(RentalSchema(many=True))
    async def get(self):
        return await self.rental_manager.get_rentals()

    @docs(summary="Rent A Vehicle")
    @expects(CreateRentalSchema())
    @returns(RentalSchema(), HTTPStatus.CREATED)
    async def post(self):
        """
        Rents a vehicle out to a user. Fails if the vehicle is already
        rented, or if another request rents it out at the same time.
        """
        data = self.request["data"]
        return await self.rental_manager.create(data["user_id"], data["vehicle_id"])


class RentalView(BaseView):
    """
    Gets or deletes a single rental.
    """
    url = "/rentals/{id:[0-9]+}"
    name = "rental"

    @docs(summary="Get A Rental")
    @returns(RentalSchema())
    async def get(self):
        return await self.rental_manager.get_rental(url_id(self.request, "Rental"))

    @docs(summary="Delete A Rental")
    async def delete(self):
        """Deleting an active rental frees up the vehicle."""
        await self.rental_manager.delete(url_id(self.request, "Rental"))
        raise web.HTTPNoContent


class RentalReturnView(BaseView):
    """
    Returns a rental.
    """
    url = "/rentals/{id:[0-9]+}/return"
    name = "rental_return"

    @docs(summary="Return A Rental")
    @expects_json()
    @returns(RentalSchema())
    async def patch(self):
        """The body must be empty."""
        validate_empty_body(self.request["data"])
        return await self.rental_manager.return_rental(url_id(self.request, "Rental"))


class UserRentalHistoryView(BaseView):
    """
    Gets all the rentals of a user.
    """
    url = "/rentals/history/users/{id:[0-9]+}"
    name = "user_rental_history"

    @docs(summary="Get The Rental History Of A User")
    @returns(RentalSchema(many=True))
    async def get(self):
        return await self.rental_manager.history_for_user(url_id(self.request, "User"))


class VehicleRentalHistoryView(BaseView):
    """
    Gets all the rentals of a vehicle.
    """
    url = "/rentals/history/vehicles/{id:[0-9]+}"
    name = "vehicle_rental_history"

    @docs(summary="Get The Rental History Of A Vehicle")
    @returns(RentalSchema(many=True))
    async def get(self):
        return await self.rental_manager.history_for_vehicle(url_id(self.request, "Vehicle"))
