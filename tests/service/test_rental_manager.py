import asyncio

import pytest

from vehicle_rental.models import Rental, Vehicle, VehicleType
from vehicle_rental.service import InactiveRentalError, CurrentlyRentedError
from vehicle_rental.service.errors import NotFoundError, ConflictError
from vehicle_rental.service.manager.rental_manager import RentalManager


async def assert_rent_status_consistent(vehicle_id: int):
    """A vehicle is rented if and only if it has exactly one active rental."""
    vehicle = await Vehicle.get(id=vehicle_id)
    active = await Rental.filter(vehicle_id=vehicle_id, end_date_time__isnull=True).count()
    assert active <= 1
    assert vehicle.is_rented == (active == 1)


async def test_create_rental(rental_manager: RentalManager, random_user, random_vehicle):
    """Assert that creating a rental marks the vehicle as rented and snapshots it."""
    rental = await rental_manager.create(random_user.id, random_vehicle.id)

    assert rental.is_active
    assert rental.start_date_time is not None
    assert rental.user_id == random_user.id
    assert rental.vehicle_registration_number == random_vehicle.registration_number
    assert rental.vehicle_type == "Car"
    assert (await Vehicle.get(id=random_vehicle.id)).is_rented
    await assert_rent_status_consistent(random_vehicle.id)


async def test_create_rental_rented_vehicle(rental_manager, random_rental, random_user_factory, random_vehicle):
    """Assert that renting a rented vehicle fails and changes nothing."""
    other_user = await random_user_factory()

    with pytest.raises(CurrentlyRentedError) as error:
        await rental_manager.create(other_user.id, random_vehicle.id)

    assert random_vehicle.registration_number in error.value.detail
    assert await Rental.all().count() == 1
    await assert_rent_status_consistent(random_vehicle.id)


async def test_create_rental_missing_user(rental_manager, random_vehicle):
    with pytest.raises(NotFoundError):
        await rental_manager.create(1234, random_vehicle.id)
    assert not (await Vehicle.get(id=random_vehicle.id)).is_rented


async def test_create_rental_missing_vehicle(rental_manager, random_user):
    with pytest.raises(NotFoundError):
        await rental_manager.create(random_user.id, 1234)


async def test_concurrent_rentals(rental_manager, random_user_factory, random_vehicle):
    """Assert that when two rentals race for the same vehicle, exactly one succeeds."""
    first, second = await random_user_factory(), await random_user_factory()

    results = await asyncio.gather(
        rental_manager.create(first.id, random_vehicle.id),
        rental_manager.create(second.id, random_vehicle.id),
        return_exceptions=True
    )

    successes = [result for result in results if isinstance(result, Rental)]
    failures = [result for result in results if isinstance(result, Exception)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert isinstance(failures[0], (ConflictError, CurrentlyRentedError))
    assert await Rental.all().count() == 1
    await assert_rent_status_consistent(random_vehicle.id)


async def test_return_rental(rental_manager, random_rental):
    """Assert that returning a rental ends it and frees up the vehicle."""
    rental = await rental_manager.return_rental(random_rental.id)

    assert not rental.is_active
    assert rental.end_date_time is not None
    assert not (await Vehicle.get(id=random_rental.vehicle_id)).is_rented
    await assert_rent_status_consistent(random_rental.vehicle_id)


async def test_return_rental_twice(rental_manager, random_rental):
    """Assert that a rental can only be returned once."""
    await rental_manager.return_rental(random_rental.id)
    with pytest.raises(InactiveRentalError):
        await rental_manager.return_rental(random_rental.id)


async def test_return_missing_rental(rental_manager, database):
    with pytest.raises(NotFoundError):
        await rental_manager.return_rental(1234)


async def test_delete_active_rental(rental_manager, random_rental):
    """Assert that deleting an active rental frees up the vehicle."""
    await rental_manager.delete(random_rental.id)

    assert await Rental.all().count() == 0
    assert not (await Vehicle.get(id=random_rental.vehicle_id)).is_rented


async def test_delete_finished_rental(rental_manager, random_user, random_vehicle):
    """Assert that deleting a finished rental leaves the rent status of the vehicle alone."""
    finished = await rental_manager.create(random_user.id, random_vehicle.id)
    await rental_manager.return_rental(finished.id)
    await rental_manager.update_rent_status(random_vehicle.id, True)

    await rental_manager.delete(finished.id)

    assert await Rental.all().count() == 0
    assert (await Vehicle.get(id=random_vehicle.id)).is_rented


async def test_delete_finished_for_user(rental_manager, random_user, random_vehicle_factory):
    """Assert that only the finished rentals of a user are deleted."""
    finished_vehicle, active_vehicle = await random_vehicle_factory(), await random_vehicle_factory()
    finished = await rental_manager.create(random_user.id, finished_vehicle.id)
    await rental_manager.return_rental(finished.id)
    await rental_manager.create(random_user.id, active_vehicle.id)

    assert await rental_manager.delete_finished_for_user(random_user.id) == 1
    assert await Rental.all().count() == 1
    assert await rental_manager.user_has_active_rental(random_user.id)
    assert await rental_manager.delete_finished_for_user(random_user.id) == 0


async def test_delete_finished_for_vehicle(rental_manager, random_user, random_vehicle):
    rental = await rental_manager.create(random_user.id, random_vehicle.id)
    await rental_manager.return_rental(rental.id)

    assert not await rental_manager.vehicle_has_active_rental(random_vehicle.id)
    assert await rental_manager.delete_finished_for_vehicle(random_vehicle.id) == 1
    assert await Rental.all().count() == 0


async def test_history(rental_manager, random_user, random_vehicle):
    """Assert that the history contains both finished and active rentals."""
    first = await rental_manager.create(random_user.id, random_vehicle.id)
    await rental_manager.return_rental(first.id)
    second = await rental_manager.create(random_user.id, random_vehicle.id)

    user_history = await rental_manager.history_for_user(random_user.id)
    vehicle_history = await rental_manager.history_for_vehicle(random_vehicle.id)

    assert [rental.id for rental in user_history] == [first.id, second.id]
    assert [rental.id for rental in vehicle_history] == [first.id, second.id]
    assert user_history[0].user.first_name == random_user.first_name


async def test_history_missing_owner(rental_manager, database):
    with pytest.raises(NotFoundError):
        await rental_manager.history_for_user(1234)
    with pytest.raises(NotFoundError):
        await rental_manager.history_for_vehicle(1234)


async def test_snapshot_not_refreshed(rental_manager, random_rental):
    """Assert that the rental keeps the registration number it was created with."""
    await Vehicle.filter(id=random_rental.vehicle_id).update(registration_number="NEW123")
    rental = await rental_manager.get_rental(random_rental.id)
    assert rental.vehicle_registration_number == random_rental.vehicle_registration_number


class TestUpdateRentStatus:

    async def test_unrent_closes_rental(self, rental_manager, random_rental):
        """Assert that marking a vehicle as not rented returns its active rental."""
        vehicle = await rental_manager.update_rent_status(random_rental.vehicle_id, False)

        assert not vehicle.is_rented
        rental = await rental_manager.get_rental(random_rental.id)
        assert not rental.is_active
        await assert_rent_status_consistent(vehicle.id)

    async def test_unrent_is_idempotent(self, rental_manager, random_rental):
        await rental_manager.update_rent_status(random_rental.vehicle_id, False)
        closed = await rental_manager.get_rental(random_rental.id)

        await rental_manager.update_rent_status(random_rental.vehicle_id, False)
        assert (await rental_manager.get_rental(random_rental.id)).end_date_time == closed.end_date_time
        assert await Rental.filter(end_date_time__isnull=False).count() == 1

    async def test_rent_creates_no_rental(self, rental_manager, random_vehicle):
        """Assert that marking a vehicle as rented is only a flag change."""
        vehicle = await rental_manager.update_rent_status(random_vehicle.id, True)

        assert vehicle.is_rented
        assert await Rental.all().count() == 0

    async def test_missing_vehicle(self, rental_manager, database):
        with pytest.raises(NotFoundError):
            await rental_manager.update_rent_status(1234, False)

    async def test_other_variants(self, rental_manager, random_user, random_vehicle_factory):
        trailer = await random_vehicle_factory(VehicleType.TRAILER)
        rental = await rental_manager.create(random_user.id, trailer.id)
        assert rental.vehicle_type == "Trailer"
