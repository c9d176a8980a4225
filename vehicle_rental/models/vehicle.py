"""
Vehicle
-------------------------

Represents a vehicle that can be rented out. The ``is_rented`` flag
mirrors whether the vehicle has an active rental, and is only changed
through the :class:`~vehicle_rental.service.manager.rental_manager.RentalManager`.
"""
from enum import Enum

from tortoise import Model, fields


class VehicleType(str, Enum):
    """The vehicle variants. The value is the name shown in the API."""

    CAR = "Car"
    TRUCK = "Truck"
    TRAILER = "Trailer"

    @classmethod
    def parse(cls, name: str) -> 'VehicleType':
        """
        Gets the variant for a case insensitive type name.

        :raises ValueError: If the name is not a known variant.
        """
        for vehicle_type in cls:
            if isinstance(name, str) and vehicle_type.value.lower() == name.lower():
                return vehicle_type
        raise ValueError(f"Unknown type: {name}")


class Vehicle(Model):
    id = fields.IntField(pk=True)
    type: VehicleType = fields.CharEnumField(VehicleType)

    registration_number = fields.CharField(max_length=255, unique=True)
    brand = fields.CharField(max_length=255)
    model_name = fields.CharField(max_length=255, source_field="model")
    is_rented = fields.BooleanField(default=False)

    seat_count = fields.IntField(null=True)
    """Only set on cars."""

    max_weight = fields.IntField(null=True)
    """Only set on trailers, in kilograms."""

    driving_license_level = fields.CharField(max_length=255, null=True)
    """Only set on trucks."""

    def __str__(self):
        return f"[{self.type.value}] {self.registration_number}"
