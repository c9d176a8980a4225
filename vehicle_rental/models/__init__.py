"""
The models package contains all the models used on the server.

Users and vehicles come in variants (admin/customer, car/truck/trailer).
Each is stored in a single table with a ``type`` discriminator and
nullable columns for the fields of each variant.

.. autoclasstree:: vehicle_rental.models
"""

from .rental import Rental
from .user import User, UserType
from .vehicle import Vehicle, VehicleType

MAX_ID = 2 ** 31 - 1
"""The largest id an integer column can hold."""
