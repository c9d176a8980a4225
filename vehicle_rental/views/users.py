"""
User Related Views
-------------------------

Handles all the user CRUD
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from vehicle_rental.models import User, UserType
from vehicle_rental.serializer.decorators import expects, expects_json, returns
from vehicle_rental.serializer.models import UserSchema, CreateUserSchema
from vehicle_rental.service.access.users import get_users, get_user, create_user, update_user, delete_user
from vehicle_rental.service.validation import validate_user_patch
from vehicle_rental.views.base import BaseView
from vehicle_rental.views.decorators import match_getter

USER_KINDS = {
    "customers": UserType.CUSTOMER,
    "admins": UserType.ADMIN,
}
"""Maps the plural used in the url to the variant."""


class UsersView(BaseView):
    """
    Gets or adds to the list of users.
    """
    url = "/users"
    name = "users"

    @docs(summary="Get All Users")
    @returns(UserSchema(many=True))
    async def get(self):
        return await get_users()

    @docs(summary="Create A User")
    @expects(CreateUserSchema())
    @returns(UserSchema(), HTTPStatus.CREATED)
    async def post(self):
        """Admins must have an ``employeeNumber``, and customers a ``phoneNumber``."""
        return await create_user(**self.request["data"])


class UserTypeView(BaseView):
    """
    Gets the users of a single variant.
    """
    url = "/users/{kind:" + "|".join(USER_KINDS) + "}"
    name = "users_by_type"

    @docs(summary="Get All Users Of A Type")
    @returns(UserSchema(many=True))
    async def get(self):
        return await get_users(user_type=USER_KINDS[self.request.match_info["kind"]])


class UserView(BaseView):
    """
    Gets, updates or deletes a single user.
    """
    url = "/users/{id:[0-9]+}"
    name = "user"
    with_user = match_getter(get_user, 'user', user_id='id')

    @with_user
    @docs(summary="Get A User")
    @returns(UserSchema())
    async def get(self, user: User):
        return user

    @with_user
    @docs(summary="Update A User")
    @expects_json()
    @returns(UserSchema())
    async def patch(self, user: User):
        """
        Changes the name or email of a user, and the phone number of a customer.
        The type and employee number cannot be changed.
        """
        changes = validate_user_patch(user, self.request["data"])
        return await update_user(user, **changes)

    @with_user
    @docs(summary="Delete A User")
    async def delete(self, user: User):
        """Deletes the user and their finished rentals. Users that are renting cannot be deleted."""
        await delete_user(user, self.rental_manager)
        raise web.HTTPNoContent
