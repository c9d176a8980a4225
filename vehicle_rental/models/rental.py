"""
Rental
---------------------------

A rental links a user to a vehicle for a period of time. The vehicle
is referenced by id along with a snapshot of its registration number
and type, taken when the rental is created. The snapshot is kept as a
historical record and is not updated when the vehicle changes.
"""

from tortoise import Model, fields


class Rental(Model):
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="rentals", on_delete=fields.RESTRICT)

    vehicle_id = fields.IntField()
    vehicle_registration_number = fields.CharField(max_length=255)
    vehicle_type = fields.CharField(max_length=16)

    start_date_time = fields.DatetimeField()
    end_date_time = fields.DatetimeField(null=True)
    """Null while the rental is active."""

    @property
    def is_active(self) -> bool:
        return self.end_date_time is None

    def __str__(self):
        return f"[{self.id}] {self.vehicle_registration_number} ({'active' if self.is_active else 'finished'})"
