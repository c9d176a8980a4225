import pytest

from vehicle_rental.models import User, UserType, Rental
from vehicle_rental.service import ActiveRentalError
from vehicle_rental.service.access.users import get_users, get_user, create_user, update_user, delete_user
from vehicle_rental.service.errors import ConflictError, UnknownTypeError
from tests.conftest import fake


async def test_get_users(random_user, random_admin):
    assert {random_user, random_admin} == set(await get_users())


async def test_get_users_by_type(random_user, random_admin):
    assert await get_users(user_type=UserType.ADMIN) == [random_admin]
    assert await get_users(user_type=UserType.CUSTOMER) == [random_user]


async def test_get_user(random_user):
    assert random_user == await get_user(user_id=random_user.id)
    assert await get_user(user_id=random_user.id + 1) is None


async def test_create_customer(database):
    """Assert that the fields of the other variant are discarded."""
    user = await create_user(
        "customer", "Anna", "Svensson", fake.email(), phone_number="+46 701234567", employee_number="ABCDEF1"
    )
    assert user.type is UserType.CUSTOMER
    assert user.phone_number == "+46 701234567"
    assert user.employee_number is None
    assert await User.all().count() == 1


async def test_create_admin(database):
    user = await create_user("ADMIN", "Erik", "Larsson", fake.email(), employee_number="ABCDEF12")
    assert user.is_admin
    assert user.employee_number == "ABCDEF12"


async def test_create_user_unknown_type(database):
    with pytest.raises(UnknownTypeError) as error:
        await create_user("Manager", "Erik", "Larsson", fake.email())
    assert error.value.detail == "Unknown type: Manager"


async def test_create_user_duplicate_email(random_user):
    with pytest.raises(ConflictError) as error:
        await create_user("Customer", "Anna", "Svensson", random_user.email, phone_number="+46 701234567")
    assert error.value.detail == "email already exists"


async def test_create_user_duplicate_employee_number(random_admin):
    with pytest.raises(ConflictError) as error:
        await create_user("Admin", "Anna", "Svensson", fake.email(), employee_number=random_admin.employee_number)
    assert error.value.detail == "employeeNumber already exists"


async def test_update_user(random_user):
    updated_user = await update_user(random_user, first_name="New Name")
    assert updated_user.first_name == "New Name"
    assert (await User.get(id=random_user.id)).first_name == "New Name"


async def test_delete_user(random_user, rental_manager, random_vehicle):
    """Assert that deleting a user removes their finished rentals."""
    rental = await rental_manager.create(random_user.id, random_vehicle.id)
    await rental_manager.return_rental(rental.id)

    await delete_user(random_user, rental_manager)
    assert await User.all().count() == 0
    assert await Rental.all().count() == 0


async def test_delete_user_active_rental(random_rental, rental_manager):
    """Assert that a user who is renting cannot be deleted."""
    user = await User.get(id=random_rental.user_id)
    with pytest.raises(ActiveRentalError):
        await delete_user(user, rental_manager)
    assert await User.all().count() == 1
    assert await Rental.all().count() == 1
