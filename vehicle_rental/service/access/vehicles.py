"""
Vehicles
--------
"""
from typing import Optional, List

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from vehicle_rental import logger
from vehicle_rental.models import Vehicle, VehicleType
from vehicle_rental.service.access.integrity import conflict_from_integrity_error
from vehicle_rental.service.errors import UnknownTypeError
from vehicle_rental.service.manager.rental_manager import RentalManager, ActiveRentalError

VARIANT_FIELDS = {
    VehicleType.CAR: ("seat_count",),
    VehicleType.TRUCK: ("driving_license_level",),
    VehicleType.TRAILER: ("max_weight",),
}
"""The fields that are only stored on a given variant."""


async def get_vehicles(*, vehicle_type: VehicleType = None) -> List[Vehicle]:
    """
    Gets all the vehicles in the system.

    :param vehicle_type: An optional variant to filter by.
    """
    query = Vehicle.all().order_by("id")

    if vehicle_type is not None:
        query = query.filter(type=vehicle_type)

    return await query


async def get_vehicle(*, vehicle_id: int) -> Optional[Vehicle]:
    return await Vehicle.filter(id=vehicle_id).first()


async def create_vehicle(
    type_name: str, registration_number: str, brand: str, model_name: str, is_rented: bool, *,
    seat_count: int = None, max_weight: int = None, driving_license_level: str = None
) -> Vehicle:
    """
    Creates a new vehicle of the given variant. Fields that
    belong to the other variants are discarded.

    :raises UnknownTypeError: When the type name is not a known variant.
    :raises ConflictError: When the registration number is taken.
    """
    try:
        vehicle_type = VehicleType.parse(type_name)
    except ValueError as error:
        raise UnknownTypeError(type_name) from error

    variant_values = {
        "seat_count": seat_count,
        "max_weight": max_weight,
        "driving_license_level": driving_license_level,
    }
    kwargs = {field: variant_values[field] for field in VARIANT_FIELDS[vehicle_type]}

    try:
        vehicle = await Vehicle.create(
            type=vehicle_type, registration_number=registration_number, brand=brand,
            model_name=model_name, is_rented=is_rented, **kwargs
        )
    except IntegrityError as error:
        raise conflict_from_integrity_error(error) from error

    logger.info("Created vehicle %s", vehicle)
    return vehicle


async def delete_vehicle(vehicle: Vehicle, rental_manager: RentalManager):
    """
    Deletes a vehicle along with its finished rentals.

    :raises ActiveRentalError: When the vehicle is currently rented out.
    """
    async with in_transaction():
        if await rental_manager.vehicle_has_active_rental(vehicle.id):
            logger.warning("Refused to delete vehicle %s with an active rental", vehicle)
            raise ActiveRentalError("Cannot delete vehicle with active rentals")

        removed = await rental_manager.delete_finished_for_vehicle(vehicle.id)
        await vehicle.delete()

    logger.info("Deleted vehicle %s and %s finished rentals", vehicle, removed)
