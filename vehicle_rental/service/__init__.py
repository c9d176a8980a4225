"""
The service layer for the system. Acts as the internal API.
The REST API uses the service layer to implement its logic.

The service layer implements the use cases for the system, such
that they may be reused by any program that needs to access it.
It is designed to represent the business logic.
"""

from .errors import ServiceError, NotFoundError, BadRequestError, ValidationFailedError, ConflictError
from .manager.rental_manager import InactiveRentalError, ActiveRentalError, CurrentlyRentedError, RentalManager
