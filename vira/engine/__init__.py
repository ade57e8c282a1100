"""Pure reservation and floor layout logic (no I/O)"""

from vira.engine.geometry import clamp, intervals_overlap, snap_to_grid
from vira.engine.scheduler import (
    ReservationRequest,
    ScheduledReservation,
    schedule_reservation,
    reschedule_reservation,
)
from vira.engine.layout import (
    FloorLayout,
    LayoutEditor,
    TableShape,
    add_table,
    check_table_geometry,
    move_table,
    remove_table,
    resize_table,
    update_table,
    validate_layout,
)

__all__ = [
    "clamp",
    "intervals_overlap",
    "snap_to_grid",
    "ReservationRequest",
    "ScheduledReservation",
    "schedule_reservation",
    "reschedule_reservation",
    "FloorLayout",
    "LayoutEditor",
    "TableShape",
    "add_table",
    "check_table_geometry",
    "move_table",
    "remove_table",
    "resize_table",
    "update_table",
    "validate_layout",
]
