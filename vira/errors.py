"""
Domain error taxonomy.

Every error here is a recoverable validation failure: callers surface the
message and let the user resubmit. ``StorageUnavailable`` is the only one that
signals the backing store itself is unreachable.
"""

from typing import Optional


class ViraError(Exception):
    """Base class for typed domain errors"""

    code = "error"
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class InvalidPartySize(ViraError):
    code = "invalid_party_size"
    status_code = 400
    default_message = "Party size must be a positive integer"


class CapacityExceeded(ViraError):
    code = "capacity_exceeded"
    status_code = 422
    default_message = "Party size exceeds the table capacity"


class InvalidInterval(ViraError):
    code = "invalid_interval"
    status_code = 422
    default_message = "Reservation must end after it starts"


class TableConflict(ViraError):
    code = "table_conflict"
    status_code = 409
    default_message = "Table is already booked for the selected time"


class MissingContact(ViraError):
    code = "missing_contact"
    status_code = 422
    default_message = "Guest name and phone are required"


class DuplicateTableNumber(ViraError):
    code = "duplicate_table_number"
    status_code = 409
    default_message = "Table numbers must be unique within a floor plan"


class LastFloorPlan(ViraError):
    code = "last_floor_plan"
    status_code = 409
    default_message = "The only floor plan of a restaurant cannot be deleted"


class NotFound(ViraError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class StorageUnavailable(ViraError):
    code = "storage_unavailable"
    status_code = 503
    default_message = "Storage is temporarily unavailable"


class InvalidTableGeometry(ViraError):
    code = "invalid_table_geometry"
    status_code = 422
    default_message = "Table must fit on the canvas and be at least two grid units in size"
