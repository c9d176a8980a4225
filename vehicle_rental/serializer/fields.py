"""
Fields
-------

Defines some additional fields and validators so that the Schemas can
serialize to and from additional native python data types.
"""

from enum import Enum
from typing import Union, Optional, Type

from marshmallow import fields, ValidationError
from marshmallow.validate import Validator


class EnumField(fields.Field):
    """
    A field that serializes an :class:`~enum.Enum` to a :class:`str` and back.

    De-serialization is case insensitive, so "car", "Car" and "CAR"
    all load as the same member.
    """

    def __init__(self, enum_type: Type[Enum], *args, **kwargs):
        """
        :param enum_type: the :class:`~enum.Enum` subclass
        """
        super().__init__(*args, **kwargs)
        if not issubclass(enum_type, Enum):
            raise ValueError(f"Expected enum type, got {type(enum_type)} instead")
        self._enum_type = enum_type

    def _serialize(self, value: Union[Enum, str, None], attr, obj, **kwargs) -> Optional[str]:
        """Converts an enum to its string value."""
        if value is None:
            return None
        if isinstance(value, self._enum_type):
            return value.value
        if isinstance(value, str) and value in (member.value for member in self._enum_type):
            return value
        raise ValidationError(f"{value} is not a member of {self._enum_type.__name__}.")

    def _deserialize(self, value, attr, data, **kwargs) -> Enum:
        """Converts a string back to the enum type."""
        if isinstance(value, str):
            for member in self._enum_type:
                if member.value.lower() == value.lower():
                    return member
        raise ValidationError(f"Unknown type: {value}")


class NotBlank(Validator):
    """Asserts that a string contains at least one non-whitespace character."""

    default_message = "Must not be blank."

    def __init__(self, error: Optional[str] = None):
        self.error = error or self.default_message

    def __call__(self, value: str) -> str:
        if value is None or not value.strip():
            raise ValidationError(self.error)
        return value
