"""
Model Serializers
-----------------

Defines serializers for the various models in the system, both the
representations that are sent back and the payloads used to create them.

The API speaks camelCase, so each field maps its snake_case
attribute to a camelCase ``data_key``.
"""

from marshmallow import Schema, validates_schema, ValidationError
from marshmallow.fields import Integer, Boolean, String, Email, DateTime
from marshmallow.validate import Length, Range, Regexp

from vehicle_rental.models import MAX_ID, UserType, VehicleType
from .fields import EnumField, NotBlank

PHONE_NUMBER_PATTERN = r"\+\d{2}\s?\d{6,15}\Z"
"""A country code followed by the number, eg. +46 701234567"""

EMPLOYEE_NUMBER_PATTERN = r"[A-Z]{6}[1-9][0-9]?\Z"
"""Six capital letters followed by a number from 1 to 99, eg. ABCDEF12"""


class UserSchema(Schema):
    """The schema corresponding to the :class:`~vehicle_rental.models.user.User` model."""

    id = Integer()
    type = EnumField(UserType)
    first_name = String(data_key="firstName")
    last_name = String(data_key="lastName")
    email = Email()
    phone_number = String(data_key="phoneNumber", allow_none=True)
    employee_number = String(data_key="employeeNumber", allow_none=True)


class VehicleSchema(Schema):
    """The schema corresponding to the :class:`~vehicle_rental.models.vehicle.Vehicle` model."""

    id = Integer()
    type = EnumField(VehicleType)
    registration_number = String(data_key="registrationNumber")
    brand = String()
    model_name = String(data_key="model")
    is_rented = Boolean(data_key="isRented")
    seat_count = Integer(data_key="seatCount", allow_none=True)
    max_weight = Integer(data_key="maxWeight", allow_none=True)
    driving_license_level = String(data_key="drivingLicenseLevel", allow_none=True)


class RentalSchema(Schema):
    """
    The schema corresponding to the :class:`~vehicle_rental.models.rental.Rental` model.

    The user must be fetched along with the rental to include the user's name.
    """

    id = Integer()
    user_id = Integer(data_key="userId")
    user_first_name = String(attribute="user.first_name", data_key="userFirstName")
    user_last_name = String(attribute="user.last_name", data_key="userLastName")
    vehicle_id = Integer(data_key="vehicleId")
    vehicle_registration_number = String(data_key="vehicleRegistrationNumber")
    vehicle_type = String(data_key="vehicleType")
    start_date_time = DateTime(data_key="startDateTime")
    end_date_time = DateTime(data_key="endDateTime", allow_none=True)


class CreateUserSchema(Schema):
    """
    The payload for creating a user.

    Loaded with ``partial=True``, the same rules validate a user patch:
    only the supplied fields are checked.
    """

    type_name = String(
        data_key="type", required=True, validate=NotBlank("Type must be specified"),
        error_messages={"required": "Type must be specified"}
    )
    first_name = String(
        data_key="firstName", required=True,
        validate=[
            NotBlank("First name must not be blank"),
            Length(min=2, max=20, error="First name must be between 2 and 20 characters")
        ],
        error_messages={"required": "First name must not be blank"}
    )
    last_name = String(
        data_key="lastName", required=True,
        validate=[
            NotBlank("Last name must not be blank"),
            Length(min=2, max=20, error="Last name must be between 2 and 20 characters")
        ],
        error_messages={"required": "Last name must not be blank"}
    )
    email = Email(
        required=True,
        validate=[NotBlank("Email must not be blank"), Length(max=255, error="Email must be at most 255 characters")],
        error_messages={"required": "Email must not be blank", "invalid": "Email must be valid"}
    )
    phone_number = String(
        data_key="phoneNumber", allow_none=True,
        validate=Regexp(PHONE_NUMBER_PATTERN, error="Phone number must be in format +46xxxxxxx")
    )
    employee_number = String(
        data_key="employeeNumber", allow_none=True,
        validate=Regexp(EMPLOYEE_NUMBER_PATTERN, error="Employee number must be in format ABCABC1-ABCABC100")
    )

    @validates_schema
    def assert_variant_fields(self, data, **kwargs):
        """
        Asserts that the fields required by the chosen variant are included.
        Unknown variants are left for the service layer to reject.
        """
        try:
            user_type = UserType.parse(data.get("type_name"))
        except ValueError:
            return

        if user_type is UserType.ADMIN and not data.get("employee_number"):
            raise ValidationError("Employee number must not be blank", field_name="employeeNumber")
        if user_type is UserType.CUSTOMER and not data.get("phone_number"):
            raise ValidationError("Phone number must not be blank", field_name="phoneNumber")


class CreateVehicleSchema(Schema):
    """The payload for creating a vehicle."""

    type_name = String(
        data_key="type", required=True,
        validate=NotBlank("Vehicle type must not be blank (Car, Truck, Trailer)"),
        error_messages={"required": "Vehicle type must not be blank (Car, Truck, Trailer)"}
    )
    registration_number = String(
        data_key="registrationNumber", required=True,
        validate=[
            NotBlank("Registration number must not be blank"),
            Length(max=255, error="Registration number must be at most 255 characters")
        ],
        error_messages={"required": "Registration number must not be blank"}
    )
    brand = String(
        required=True,
        validate=[NotBlank("Brand must not be blank"), Length(max=255, error="Brand must be at most 255 characters")],
        error_messages={"required": "Brand must not be blank"}
    )
    model_name = String(
        data_key="model", required=True,
        validate=[NotBlank("Model must not be blank"), Length(max=255, error="Model must be at most 255 characters")],
        error_messages={"required": "Model must not be blank"}
    )
    is_rented = Boolean(
        data_key="isRented", required=True,
        error_messages={"required": "Rented status must not be null", "null": "Rented status must not be null"}
    )
    seat_count = Integer(
        data_key="seatCount", allow_none=True, strict=True,
        validate=[
            Range(min=1, error="Car must have at least 1 seat"),
            Range(max=9, error="Car cannot have more than 9 seats"),
        ]
    )
    max_weight = Integer(
        data_key="maxWeight", allow_none=True, strict=True,
        validate=[
            Range(min=1, error="Max weight must be positive"),
            Range(max=750, error="Max weight cannot exceed 750kg"),
        ]
    )
    driving_license_level = String(
        data_key="drivingLicenseLevel", allow_none=True,
        validate=Length(max=255, error="Driving license level must be at most 255 characters")
    )

    @validates_schema
    def assert_variant_fields(self, data, **kwargs):
        """Asserts that the fields required by the chosen variant are included."""
        try:
            vehicle_type = VehicleType.parse(data.get("type_name"))
        except ValueError:
            return

        if vehicle_type is VehicleType.CAR and data.get("seat_count") is None:
            raise ValidationError("Seat count must not be null", field_name="seatCount")
        if vehicle_type is VehicleType.TRAILER and data.get("max_weight") is None:
            raise ValidationError("Max weight must not be null", field_name="maxWeight")
        if vehicle_type is VehicleType.TRUCK and not (data.get("driving_license_level") or "").strip():
            raise ValidationError("Driving license level must not be blank", field_name="drivingLicenseLevel")


class CreateRentalSchema(Schema):
    """The payload for renting a vehicle to a user."""

    user_id = Integer(
        data_key="userId", required=True, validate=Range(min=1, max=MAX_ID, error="User id is out of range"),
        error_messages={"required": "User id must not be null"}
    )
    vehicle_id = Integer(
        data_key="vehicleId", required=True, validate=Range(min=1, max=MAX_ID, error="Vehicle id is out of range"),
        error_messages={"required": "Vehicle id must not be null"}
    )
