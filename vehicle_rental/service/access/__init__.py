"""
The data access functions for the entities that are not owned
by one of the managers. Rentals are only accessed through the
:class:`~vehicle_rental.service.manager.rental_manager.RentalManager`.
"""
