"""
Rental Manager
--------------

This module is what handles all the rentals in the system.

Responsibilities
================

This object is the only thing that changes whether a vehicle is rented,
and keeps the ``is_rented`` flag in step with the rentals.

- creating a rental
- returning a rental
- deleting rentals
- correcting the rent status of a vehicle
- getting the rental history

Each operation that touches both a rental and a vehicle runs in a
single transaction, so nothing partial is ever committed.
"""

from typing import List

from tortoise import timezone
from tortoise.transactions import in_transaction

from vehicle_rental import logger
from vehicle_rental.models import Rental, User, Vehicle
from vehicle_rental.service.errors import BadRequestError, ConflictError, NotFoundError


class InactiveRentalError(BadRequestError):
    """Raised when an operation requires the rental to be active, but it was already returned."""


class ActiveRentalError(BadRequestError):
    """Raised when an operation requires that there be no active rental."""


class CurrentlyRentedError(BadRequestError):
    """Raised when the requested vehicle is already rented."""

    def __init__(self, registration_number: str):
        super().__init__(f"Vehicle is already rented: {registration_number}")
        self.registration_number = registration_number


class RentalManager:
    """
    Handles the lifecycle of the rentals in the system.

    A vehicle is rented if and only if it has an active rental (one
    without an end time), and it has at most one of those at a time.
    """

    async def create(self, user_id: int, vehicle_id: int) -> Rental:
        """
        Rents a vehicle out to a user.

        :raises NotFoundError: If the user or vehicle does not exist.
        :raises CurrentlyRentedError: If the requested vehicle is in use.
        :raises ConflictError: If the vehicle was rented by someone else in the meantime.
        """
        user = await User.filter(id=user_id).first()
        if user is None:
            raise NotFoundError("User not found")

        vehicle = await Vehicle.filter(id=vehicle_id).first()
        if vehicle is None:
            raise NotFoundError("Vehicle not found")

        if vehicle.is_rented:
            logger.warning("Refused to rent out %s, it is already rented", vehicle)
            raise CurrentlyRentedError(vehicle.registration_number)

        async with in_transaction():
            # the flag is checked again as part of the write
            updated = await Vehicle.filter(id=vehicle.id, is_rented=False).update(is_rented=True)
            if not updated:
                logger.warning("Lost the race to rent out %s", vehicle)
                raise ConflictError(f"Vehicle is already rented: {vehicle.registration_number}")

            rental = await Rental.create(
                user=user,
                vehicle_id=vehicle.id,
                vehicle_registration_number=vehicle.registration_number,
                vehicle_type=vehicle.type.value,
                start_date_time=timezone.now(),
                end_date_time=None,
            )

        logger.info("Rented %s to user %s (rental %s)", vehicle, user.id, rental.id)
        return rental

    async def return_rental(self, rental_id: int) -> Rental:
        """
        Completes a rental, freeing up the vehicle.

        :raises NotFoundError: If the rental does not exist.
        :raises InactiveRentalError: If the rental was already returned.
        """
        rental = await self.get_rental(rental_id)
        if not rental.is_active:
            logger.warning("Refused to return rental %s, it is already returned", rental.id)
            raise InactiveRentalError("Rental already returned")

        end_date_time = timezone.now()
        async with in_transaction():
            updated = await Rental.filter(id=rental.id, end_date_time__isnull=True).update(end_date_time=end_date_time)
            if not updated:
                raise InactiveRentalError("Rental already returned")
            await Vehicle.filter(id=rental.vehicle_id).update(is_rented=False)

        rental.end_date_time = end_date_time
        logger.info("Returned rental %s", rental)
        return rental

    async def delete(self, rental_id: int):
        """
        Deletes a rental. If it is still active, the vehicle is freed up.

        :raises NotFoundError: If the rental does not exist.
        """
        rental = await self.get_rental(rental_id)

        async with in_transaction():
            if rental.is_active:
                await Vehicle.filter(id=rental.vehicle_id).update(is_rented=False)
            await Rental.filter(id=rental.id).delete()

        logger.info("Deleted rental %s", rental)

    async def delete_finished_for_user(self, user_id: int) -> int:
        """Deletes all the finished rentals of a user, returning how many were removed."""
        return await Rental.filter(user_id=user_id, end_date_time__isnull=False).delete()

    async def delete_finished_for_vehicle(self, vehicle_id: int) -> int:
        """Deletes all the finished rentals of a vehicle, returning how many were removed."""
        return await Rental.filter(vehicle_id=vehicle_id, end_date_time__isnull=False).delete()

    async def user_has_active_rental(self, user_id: int) -> bool:
        return await Rental.filter(user_id=user_id, end_date_time__isnull=True).exists()

    async def vehicle_has_active_rental(self, vehicle_id: int) -> bool:
        return await Rental.filter(vehicle_id=vehicle_id, end_date_time__isnull=True).exists()

    async def history_for_user(self, user_id: int) -> List[Rental]:
        """
        Gets all the rentals, active or finished, of a given user.

        :raises NotFoundError: If the user does not exist.
        """
        if not await User.filter(id=user_id).exists():
            raise NotFoundError("User not found")
        return await Rental.filter(user_id=user_id).order_by("id").prefetch_related("user")

    async def history_for_vehicle(self, vehicle_id: int) -> List[Rental]:
        """
        Gets all the rentals, active or finished, of a given vehicle.

        :raises NotFoundError: If the vehicle does not exist.
        """
        if not await Vehicle.filter(id=vehicle_id).exists():
            raise NotFoundError("Vehicle not found")
        return await Rental.filter(vehicle_id=vehicle_id).order_by("id").prefetch_related("user")

    async def get_rental(self, rental_id: int) -> Rental:
        """
        :raises NotFoundError: If the rental does not exist.
        """
        rental = await Rental.filter(id=rental_id).first().prefetch_related("user")
        if rental is None:
            raise NotFoundError("Rental not found")
        return rental

    async def get_rentals(self) -> List[Rental]:
        return await Rental.all().order_by("id").prefetch_related("user")

    async def update_rent_status(self, vehicle_id: int, rented: bool) -> Vehicle:
        """
        Sets whether a vehicle is rented. This is a manual correction:

        - setting it to not rented closes the active rental, if there is one
        - setting it to rented does not create a rental

        :raises NotFoundError: If the vehicle does not exist.
        """
        vehicle = await Vehicle.filter(id=vehicle_id).first()
        if vehicle is None:
            raise NotFoundError("Vehicle not found")

        async with in_transaction():
            closed = 0
            if not rented:
                closed = await Rental.filter(
                    vehicle_id=vehicle.id, end_date_time__isnull=True
                ).update(end_date_time=timezone.now())
            await Vehicle.filter(id=vehicle.id).update(is_rented=rented)

        vehicle.is_rented = rented
        logger.info("Set rent status of %s to %s, closing %s rentals", vehicle, rented, closed)
        return vehicle
