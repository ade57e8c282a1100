"""
Floor layout geometry.

Tables live on a bounded canvas and are kept grid-aligned and inside the
canvas while they are dragged or resized. Every operation here is a pure
function of the current layout plus a pointer delta; persistence happens
elsewhere, on an explicit save.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

from vira.engine.geometry import clamp, snap_to_grid
from vira.errors import DuplicateTableNumber, InvalidTableGeometry, NotFound

GRID_SIZE = 24
DEFAULT_SEATS = 4


@dataclass(frozen=True)
class TableShape:
    """A table as drawn on the floor plan"""
    number: str
    seats: int
    x: float
    y: float
    width: float
    height: float
    id: Optional[Any] = None
    label: Optional[str] = None
    rotation: Optional[float] = None

    @property
    def key(self) -> str:
        # Unsaved tables have no id yet, so they are addressed by number
        return f"id:{self.id}" if self.id is not None else f"tmp:{self.number}"

    def matches(self, table_id: Any) -> bool:
        if table_id == self.key:
            return True
        return self.id is not None and str(table_id) == str(self.id)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "number": self.number,
            "label": self.label,
            "seats": self.seats,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass(frozen=True)
class FloorLayout:
    """Canvas bounds plus the tables placed on it"""
    canvas_width: float
    canvas_height: float
    tables: List[TableShape] = field(default_factory=list)
    name: str = "Main"
    id: Optional[Any] = None
    grid_size: int = GRID_SIZE

    @property
    def min_table_size(self) -> int:
        return self.grid_size * 2

    def find(self, table_id: Any) -> TableShape:
        for table in self.tables:
            if table.matches(table_id):
                return table
        raise NotFound(f"Table {table_id} not found on the floor plan", table_id=table_id)

    def with_table(self, table: TableShape, key: Optional[str] = None) -> "FloorLayout":
        """Return a copy with the table at ``key`` (default: its own key) replaced or appended"""
        key = key or table.key
        tables = list(self.tables)
        for index, current in enumerate(tables):
            if current.key == key:
                tables[index] = table
                break
        else:
            tables.append(table)
        return replace(self, tables=tables)

    def without_table(self, table_id: Any) -> "FloorLayout":
        target = self.find(table_id)
        return replace(self, tables=[t for t in self.tables if t.key != target.key])

    def to_payload(self) -> Dict[str, Any]:
        """Shape handed to storage on save"""
        return {
            "name": self.name,
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "tables": [table.to_payload() for table in self.tables],
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], grid_size: int = GRID_SIZE) -> "FloorLayout":
        tables = [
            TableShape(
                id=item.get("id"),
                number=str(item["number"]),
                label=item.get("label"),
                seats=item["seats"],
                x=item["x"],
                y=item["y"],
                width=item["width"],
                height=item["height"],
                rotation=item.get("rotation"),
            )
            for item in payload.get("tables", [])
        ]
        return cls(
            id=payload.get("id"),
            name=payload.get("name") or "Main",
            canvas_width=payload["canvas_width"],
            canvas_height=payload["canvas_height"],
            tables=tables,
            grid_size=grid_size,
        )


def move_table(plan: FloorLayout, table_id: Any, dx: float, dy: float) -> TableShape:
    """Offset a table by the pointer delta, snapped and kept inside the canvas"""
    table = plan.find(table_id)
    x = snap_to_grid(table.x + dx, plan.grid_size)
    y = snap_to_grid(table.y + dy, plan.grid_size)
    return replace(
        table,
        x=clamp(x, 0, plan.canvas_width - table.width),
        y=clamp(y, 0, plan.canvas_height - table.height),
    )


def resize_table(plan: FloorLayout, table_id: Any, dx: float, dy: float) -> TableShape:
    """Grow or shrink a table from its bottom-right handle"""
    table = plan.find(table_id)
    min_size = plan.min_table_size
    raw_width = max(min_size, table.width + dx)
    raw_height = max(min_size, table.height + dy)
    max_width = max(0, plan.canvas_width - table.x)
    max_height = max(0, plan.canvas_height - table.y)
    width = min(snap_to_grid(raw_width, plan.grid_size), max_width)
    height = min(snap_to_grid(raw_height, plan.grid_size), max_height)
    return replace(
        table,
        width=max(min_size, width),
        height=max(min_size, height),
    )


def validate_layout(tables: Iterable[Any]) -> None:
    """Raise DuplicateTableNumber if two tables share a (trimmed) number"""
    seen = set()
    for table in tables:
        number = str(table.number).strip()
        if number in seen:
            raise DuplicateTableNumber(
                f"Table number {number} is used more than once", number=number
            )
        seen.add(number)


def check_table_geometry(
    tables: Iterable[Any],
    canvas_width: float,
    canvas_height: float,
    grid_size: int = GRID_SIZE,
) -> None:
    """Raise InvalidTableGeometry for a table that is undersized or leaves the canvas"""
    min_size = grid_size * 2
    for table in tables:
        number = str(table.number).strip()
        if table.width < min_size or table.height < min_size:
            raise InvalidTableGeometry(
                f"Table {number} must be at least {min_size}x{min_size}",
                number=number,
            )
        if (
            table.x < 0
            or table.y < 0
            or table.x + table.width > canvas_width
            or table.y + table.height > canvas_height
        ):
            raise InvalidTableGeometry(
                f"Table {number} does not fit on the {canvas_width:g}x{canvas_height:g} canvas",
                number=number,
            )


def _numeric(value: str) -> Optional[float]:
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def next_table_number(tables: List[TableShape]) -> str:
    numbers = [n for n in (_numeric(t.number) for t in tables) if n is not None]
    if not numbers:
        return str(len(tables) + 1)
    candidate = max(numbers) + 1
    return str(int(candidate)) if candidate.is_integer() else str(candidate)


def add_table(plan: FloorLayout) -> TableShape:
    """New four-seat table, three grid units square, two units from the origin"""
    grid = plan.grid_size
    return TableShape(
        number=next_table_number(plan.tables),
        seats=DEFAULT_SEATS,
        x=grid * 2,
        y=grid * 2,
        width=grid * 3,
        height=grid * 3,
    )


def update_table(plan: FloorLayout, table_id: Any, **changes: Any) -> TableShape:
    """Apply form edits and keep the result on the canvas.

    Width and height are snapped, capped at the room left before the canvas
    edge and kept above the minimum, as in ``resize_table``. The position is
    then clamped so the far edges stay inside the canvas.
    """
    table = plan.find(table_id)
    min_size = plan.min_table_size
    if changes.get("seats") is not None:
        changes["seats"] = max(1, int(changes["seats"]))
    x = changes.get("x") if changes.get("x") is not None else table.x
    y = changes.get("y") if changes.get("y") is not None else table.y
    for dimension, position, canvas in (
        ("width", x, plan.canvas_width),
        ("height", y, plan.canvas_height),
    ):
        if changes.get(dimension) is not None:
            snapped = max(min_size, snap_to_grid(changes[dimension], plan.grid_size))
            changes[dimension] = max(min_size, min(snapped, max(0, canvas - position)))
    table = replace(table, **changes)
    return replace(
        table,
        x=clamp(table.x, 0, plan.canvas_width - table.width),
        y=clamp(table.y, 0, plan.canvas_height - table.height),
    )


def remove_table(plan: FloorLayout, table_id: Any) -> FloorLayout:
    return plan.without_table(table_id)


@dataclass
class Gesture:
    kind: str
    origin: TableShape


class LayoutEditor:
    """Interactive editing session over a layout.

    Holds at most one active gesture, so only one table is dragged or resized
    at a time. ``pointer_move`` receives the delta from where the gesture
    started and recomputes geometry from the table's state at that moment.
    """

    DRAG = "drag"
    RESIZE = "resize"

    def __init__(self, layout: FloorLayout):
        self.layout = layout
        self.gesture: Optional[Gesture] = None
        self.selected_key: Optional[str] = layout.tables[0].key if layout.tables else None

    @property
    def active_table_key(self) -> Optional[str]:
        return self.gesture.origin.key if self.gesture else None

    def begin_drag(self, table_id: Any) -> None:
        self._begin(self.DRAG, table_id)

    def begin_resize(self, table_id: Any) -> None:
        self._begin(self.RESIZE, table_id)

    def _begin(self, kind: str, table_id: Any) -> None:
        table = self.layout.find(table_id)
        # A new gesture replaces whatever was in progress
        self.gesture = Gesture(kind=kind, origin=table)
        self.selected_key = table.key

    def pointer_move(self, dx: float, dy: float) -> Optional[TableShape]:
        if self.gesture is None:
            return None
        origin = self.gesture.origin
        if not any(table.key == origin.key for table in self.layout.tables):
            # The table was removed or renumbered under the pointer
            self.gesture = None
            return None
        start = self.layout.with_table(origin)
        if self.gesture.kind == self.DRAG:
            table = move_table(start, origin.key, dx, dy)
        else:
            table = resize_table(start, origin.key, dx, dy)
        self.layout = self.layout.with_table(table)
        return table

    def pointer_up(self) -> None:
        self.gesture = None

    def add_table(self) -> TableShape:
        table = add_table(self.layout)
        self.layout = self.layout.with_table(table)
        self.selected_key = table.key
        return table

    def _end_gesture_on(self, key: str) -> None:
        if self.gesture is not None and self.gesture.origin.key == key:
            self.gesture = None

    def update_selected(self, **changes: Any) -> Optional[TableShape]:
        if self.selected_key is None:
            return None
        current = self.layout.find(self.selected_key)
        self._end_gesture_on(current.key)
        table = update_table(self.layout, current.key, **changes)
        self.layout = self.layout.with_table(table, key=current.key)
        self.selected_key = table.key
        return table

    def remove_selected(self) -> None:
        if self.selected_key is None:
            return
        self._end_gesture_on(self.selected_key)
        self.layout = remove_table(self.layout, self.selected_key)
        self.selected_key = None

    def save_payload(self) -> Dict[str, Any]:
        """Check the layout and return what gets submitted on save"""
        validate_layout(self.layout.tables)
        check_table_geometry(
            self.layout.tables,
            self.layout.canvas_width,
            self.layout.canvas_height,
            self.layout.grid_size,
        )
        return self.layout.to_payload()
