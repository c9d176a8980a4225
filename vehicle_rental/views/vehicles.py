"""
Vehicle Related Views
-------------------------

Handles all the vehicle CRUD. The rent status of a vehicle is
changed through the rental manager, see :class:`VehicleRentView`.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from vehicle_rental.models import Vehicle, VehicleType
from vehicle_rental.serializer.decorators import expects, expects_json, returns
from vehicle_rental.serializer.models import VehicleSchema, CreateVehicleSchema
from vehicle_rental.service.access.vehicles import get_vehicles, get_vehicle, create_vehicle, delete_vehicle
from vehicle_rental.service.validation import validate_rent_patch
from vehicle_rental.views.base import BaseView
from vehicle_rental.views.decorators import match_getter

VEHICLE_KINDS = {
    "cars": VehicleType.CAR,
    "trucks": VehicleType.TRUCK,
    "trailers": VehicleType.TRAILER,
}
"""Maps the plural used in the url to the variant."""


class VehiclesView(BaseView):
    """
    Gets or adds to the list of vehicles.
    """
    url = "/vehicles"
    name = "vehicles"

    @docs(summary="Get All Vehicles")
    @returns(VehicleSchema(many=True))
    async def get(self):
        return await get_vehicles()

    @docs(summary="Create A Vehicle")
    @expects(CreateVehicleSchema())
    @returns(VehicleSchema(), HTTPStatus.CREATED)
    async def post(self):
        """
        Creates a car, truck or trailer. The ``type`` decides which of
        ``seatCount``, ``drivingLicenseLevel`` and ``maxWeight`` is required.
        """
        return await create_vehicle(**self.request["data"])


class VehicleTypeView(BaseView):
    """
    Gets the vehicles of a single variant.
    """
    url = "/vehicles/{kind:" + "|".join(VEHICLE_KINDS) + "}"
    name = "vehicles_by_type"

    @docs(summary="Get All Vehicles Of A Type")
    @returns(VehicleSchema(many=True))
    async def get(self):
        return await get_vehicles(vehicle_type=VEHICLE_KINDS[self.request.match_info["kind"]])


class VehicleView(BaseView):
    """
    Gets or deletes a single vehicle.
    """
    url = "/vehicles/{id:[0-9]+}"
    name = "vehicle"
    with_vehicle = match_getter(get_vehicle, 'vehicle', vehicle_id='id')

    @with_vehicle
    @docs(summary="Get A Vehicle")
    @returns(VehicleSchema())
    async def get(self, vehicle: Vehicle):
        return vehicle

    @with_vehicle
    @docs(summary="Delete A Vehicle")
    async def delete(self, vehicle: Vehicle):
        """Deletes the vehicle and its finished rentals. Vehicles that are rented out cannot be deleted."""
        await delete_vehicle(vehicle, self.rental_manager)
        raise web.HTTPNoContent


class VehicleRentView(BaseView):
    """
    Corrects the rent status of a vehicle.
    """
    url = "/vehicles/{id:[0-9]+}/rent"
    name = "vehicle_rent"
    with_vehicle = match_getter(get_vehicle, 'vehicle', vehicle_id='id')

    @with_vehicle
    @docs(summary="Set The Rent Status Of A Vehicle")
    @expects_json()
    @returns(VehicleSchema())
    async def patch(self, vehicle: Vehicle):
        """
        Accepts ``{"rented": bool}``. Marking a vehicle as not rented
        returns its active rental, while marking it as rented does not
        create one.
        """
        rented = validate_rent_patch(self.request["data"])
        return await self.rental_manager.update_rent_status(vehicle.id, rented)
