import os

import pytest
from aiohttp.test_utils import TestClient
from faker import Faker
from tortoise import Tortoise, connections

from vehicle_rental.app import build_app
from vehicle_rental.models import User, UserType, Vehicle, VehicleType
from vehicle_rental.service.manager.rental_manager import RentalManager

ADMIN_KEY = "test-admin-key"
USER_KEY = "test-user-key"

UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

fake = Faker()


@pytest.fixture
def database_url():
    return os.getenv("TEST_DATABASE_URL", "sqlite://:memory:")


@pytest.fixture
async def database(database_url):
    await Tortoise.init(
        db_url=database_url,
        modules={'models': ['vehicle_rental.models']},
    )
    await Tortoise.generate_schemas(safe=True)
    yield
    await connections.close_all()


def random_user_data(user_type: UserType = UserType.CUSTOMER):
    """Valid api data for a user of the given type."""
    data = {
        "type": user_type.value,
        "firstName": fake.first_name()[:20],
        "lastName": fake.last_name()[:20],
        "email": fake.unique.email(),
    }
    if user_type is UserType.ADMIN:
        data["employeeNumber"] = fake.unique.bothify("??????%#", letters=UPPERCASE)
    else:
        data["phoneNumber"] = fake.numerify("+46 70#######")
    return data


def random_vehicle_data(vehicle_type: VehicleType = VehicleType.CAR, is_rented=False):
    """Valid api data for a vehicle of the given type."""
    data = {
        "type": vehicle_type.value,
        "registrationNumber": fake.unique.bothify("???###", letters=UPPERCASE),
        "brand": fake.company()[:40],
        "model": fake.word().capitalize(),
        "isRented": is_rented,
    }
    if vehicle_type is VehicleType.CAR:
        data["seatCount"] = fake.random_int(1, 9)
    elif vehicle_type is VehicleType.TRUCK:
        data["drivingLicenseLevel"] = fake.random_element(("C", "C1", "CE"))
    else:
        data["maxWeight"] = fake.random_int(1, 750)
    return data


@pytest.fixture
def random_user_factory(database):
    async def create_user(user_type: UserType = UserType.CUSTOMER):
        if user_type is UserType.ADMIN:
            extra = {"employee_number": fake.unique.bothify("??????%#", letters=UPPERCASE)}
        else:
            extra = {"phone_number": fake.numerify("+46 70#######")}

        return await User.create(
            type=user_type, first_name=fake.first_name()[:20], last_name=fake.last_name()[:20],
            email=fake.unique.email(), **extra
        )

    return create_user


@pytest.fixture
def random_vehicle_factory(database):
    async def create_vehicle(vehicle_type: VehicleType = VehicleType.CAR, is_rented=False):
        extra = {
            VehicleType.CAR: {"seat_count": fake.random_int(1, 9)},
            VehicleType.TRUCK: {"driving_license_level": "C"},
            VehicleType.TRAILER: {"max_weight": fake.random_int(1, 750)},
        }[vehicle_type]

        return await Vehicle.create(
            type=vehicle_type, registration_number=fake.unique.bothify("???###", letters=UPPERCASE),
            brand=fake.company()[:40], model_name=fake.word().capitalize(), is_rented=is_rented, **extra
        )

    return create_vehicle


@pytest.fixture
def rental_manager(database):
    return RentalManager()


@pytest.fixture
async def client(aiohttp_client, database) -> TestClient:
    app = build_app(admin_key=ADMIN_KEY, user_key=USER_KEY, init_database=False)
    return await aiohttp_client(app)


@pytest.fixture
def admin_headers():
    return {"X-API-KEY": ADMIN_KEY}


@pytest.fixture
def user_headers():
    return {"X-API-KEY": USER_KEY}


@pytest.fixture
async def random_user(random_user_factory) -> User:
    """Creates a random customer in the database."""
    return await random_user_factory()


@pytest.fixture
async def random_admin(random_user_factory) -> User:
    return await random_user_factory(UserType.ADMIN)


@pytest.fixture
async def random_vehicle(random_vehicle_factory) -> Vehicle:
    """Creates a random car in the database."""
    return await random_vehicle_factory()


@pytest.fixture
async def random_rental(rental_manager, random_user, random_vehicle):
    """Creates an active rental in the database."""
    return await rental_manager.create(random_user.id, random_vehicle.id)
