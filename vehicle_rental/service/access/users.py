"""
Users
-----
"""
from typing import Optional, List

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from vehicle_rental import logger
from vehicle_rental.models import User, UserType
from vehicle_rental.service.access.integrity import conflict_from_integrity_error
from vehicle_rental.service.errors import UnknownTypeError
from vehicle_rental.service.manager.rental_manager import RentalManager, ActiveRentalError

VARIANT_FIELDS = {
    UserType.ADMIN: ("employee_number",),
    UserType.CUSTOMER: ("phone_number",),
}
"""The fields that are only stored on a given variant."""


async def get_users(*, user_type: UserType = None) -> List[User]:
    """
    Gets all the users in the system.

    :param user_type: An optional variant to filter by.
    """
    query = User.all().order_by("id")

    if user_type is not None:
        query = query.filter(type=user_type)

    return await query


async def get_user(*, user_id: int) -> Optional[User]:
    return await User.filter(id=user_id).first()


async def create_user(
    type_name: str, first_name: str, last_name: str, email: str, *,
    phone_number: str = None, employee_number: str = None
) -> User:
    """
    Creates a new user of the given variant. Fields that
    belong to the other variant are discarded.

    :raises UnknownTypeError: When the type name is not a known variant.
    :raises ConflictError: When the email or employee number is taken.
    """
    try:
        user_type = UserType.parse(type_name)
    except ValueError as error:
        raise UnknownTypeError(type_name) from error

    variant_values = {"phone_number": phone_number, "employee_number": employee_number}
    kwargs = {field: variant_values[field] for field in VARIANT_FIELDS[user_type]}

    try:
        user = await User.create(type=user_type, first_name=first_name, last_name=last_name, email=email, **kwargs)
    except IntegrityError as error:
        raise conflict_from_integrity_error(error) from error

    logger.info("Created user %s", user)
    return user


async def update_user(user: User, **changes) -> User:
    """
    Applies an already validated set of changes to the user.

    :raises ConflictError: When the new email is taken.
    """
    user.update_from_dict(changes)

    try:
        await user.save()
    except IntegrityError as error:
        raise conflict_from_integrity_error(error) from error

    return user


async def delete_user(user: User, rental_manager: RentalManager):
    """
    Deletes a user along with their finished rentals.

    :raises ActiveRentalError: When the user is currently renting a vehicle.
    """
    async with in_transaction():
        if await rental_manager.user_has_active_rental(user.id):
            logger.warning("Refused to delete user %s with an active rental", user)
            raise ActiveRentalError("Cannot delete user with active rentals")

        removed = await rental_manager.delete_finished_for_user(user.id)
        await user.delete()

    logger.info("Deleted user %s and %s finished rentals", user, removed)
