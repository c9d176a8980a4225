"""
User
---------------------------
"""
from enum import Enum

from tortoise import Model, fields


class UserType(str, Enum):
    """The user variants. The value is the name shown in the API."""

    ADMIN = "Admin"
    CUSTOMER = "Customer"

    @classmethod
    def parse(cls, name: str) -> 'UserType':
        """
        Gets the variant for a case insensitive type name.

        :raises ValueError: If the name is not a known variant.
        """
        for user_type in cls:
            if isinstance(name, str) and user_type.value.lower() == name.lower():
                return user_type
        raise ValueError(f"Unknown type: {name}")


class User(Model):
    """
    Represents a User in the system.

    A user is either an admin or a customer, fixed when the user is created.
    """

    id = fields.IntField(pk=True)
    type: UserType = fields.CharEnumField(UserType)

    first_name = fields.CharField(max_length=20)
    last_name = fields.CharField(max_length=20)
    email = fields.CharField(max_length=255, unique=True)

    phone_number = fields.CharField(max_length=32, null=True)
    """Only set on customers."""

    employee_number = fields.CharField(max_length=8, unique=True, null=True)
    """Only set on admins."""

    @property
    def is_admin(self) -> bool:
        return self.type is UserType.ADMIN

    @property
    def is_customer(self) -> bool:
        return self.type is UserType.CUSTOMER

    def __str__(self):
        return f"[{self.id}] {self.first_name} {self.last_name} ({self.email})"
