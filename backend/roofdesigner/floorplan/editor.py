"""Floor-plan editor: pointer interaction state machine and selected-item edits.

Coordinate system:
- Item positions and sizes are percentages of the canvas container.
- Pointer events arrive in client pixels and are converted against the
  container's bounding rect at the time of the event.
- The top quarter of the canvas (y < 25) is the outdoor terrace.

States: Idle (``drag is None``) and Dragging (``drag`` holds the item id and
the grab offset). Selection is tracked separately and survives drag end.
"""

import logging
from dataclasses import dataclass

from ..models.schemas import CONNECTIVITY_ORDER, ROTATION_STEP, Connectivity, FloorItem, Zone
from .layouts import initial_items

logger = logging.getLogger(__name__)

# Canvas line between the outdoor terrace (above) and the indoor studio (below)
OUTDOOR_LINE_PCT = 25

MIN_SIZE_PCT = 5
MAX_SIZE_PCT = 80


def classify_zone(y: float) -> Zone:
    """Zone for an item whose top edge sits at ``y`` percent."""
    return "outdoor" if y < OUTDOOR_LINE_PCT else "indoor"


@dataclass(frozen=True)
class ContainerRect:
    """Bounding rect of the canvas container, in client pixels."""
    left: float
    top: float
    width: float
    height: float

    @property
    def is_mounted(self) -> bool:
        """A zero-sized rect means the canvas is not laid out yet."""
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class DragState:
    item_id: str
    offset_x: float  # pointer% minus item x at grab time
    offset_y: float


def to_percent(client_x: float, client_y: float, rect: ContainerRect) -> tuple[float, float]:
    """Convert a client-pixel pointer position to container percentages."""
    x_pct = (client_x - rect.left) / rect.width * 100
    y_pct = (client_y - rect.top) / rect.height * 100
    return x_pct, y_pct


def _clamp_size(value: float) -> float:
    return max(MIN_SIZE_PCT, min(MAX_SIZE_PCT, value))


class FloorPlanEditor:
    """Owns the ordered item list and applies pointer and property edits to it.

    Every update replaces the affected item with a modified copy, so snapshots
    handed out earlier (e.g. to an in-flight generation) never change.
    """

    def __init__(self, items: list[FloorItem] | None = None):
        self._items: list[FloorItem] = [item.model_copy() for item in items or []]
        self._check_unique_ids(self._items)
        self.selected_id: str | None = None
        self.drag: DragState | None = None

    # -- state ---------------------------------------------------------------

    @property
    def items(self) -> list[FloorItem]:
        """Snapshot of the layout in z-order."""
        return [item.model_copy() for item in self._items]

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    @property
    def selected_item(self) -> FloorItem | None:
        if self.selected_id is None:
            return None
        index = self._index_of(self.selected_id, missing_ok=True)
        return None if index is None else self._items[index].model_copy()

    def seed_if_empty(self) -> bool:
        """Install the starter layout when nothing has been placed yet."""
        if self._items:
            return False
        self._items = initial_items()
        logger.info("Seeded floor plan with %d starter items", len(self._items))
        return True

    def reset(self) -> None:
        """Discard all edits and restore the starter layout."""
        self._items = initial_items()
        self.selected_id = None
        self.drag = None

    # -- pointer interaction -------------------------------------------------

    def pointer_down(
        self,
        item_id: str,
        client_x: float,
        client_y: float,
        rect: ContainerRect | None,
    ) -> None:
        """Select an item and start dragging it from the grab point.

        Without a mounted container only the selection changes.
        """
        item = self._items[self._index_of(item_id)]
        self.selected_id = item_id
        if rect is None or not rect.is_mounted:
            return

        x_pct, y_pct = to_percent(client_x, client_y, rect)
        self.drag = DragState(item_id=item_id, offset_x=x_pct - item.x, offset_y=y_pct - item.y)

    def pointer_move(self, client_x: float, client_y: float, rect: ContainerRect | None) -> FloorItem | None:
        """Move the dragged item so the grab point follows the pointer.

        No clamping: items may leave the canvas entirely. Returns the updated
        item, or None when idle or unmounted.
        """
        if self.drag is None or rect is None or not rect.is_mounted:
            return None

        x_pct, y_pct = to_percent(client_x, client_y, rect)
        new_x = x_pct - self.drag.offset_x
        new_y = y_pct - self.drag.offset_y
        return self._replace(self.drag.item_id, x=new_x, y=new_y, zone=classify_zone(new_y))

    def pointer_up(self) -> None:
        """End any drag. Safe to call when nothing is being dragged."""
        self.drag = None

    # -- selection-driven edits ----------------------------------------------

    def select(self, item_id: str | None) -> None:
        if item_id is not None:
            self._index_of(item_id)
        self.selected_id = item_id

    def update_selected(self, **updates) -> FloorItem | None:
        if self.selected_id is None:
            return None
        return self._replace(self.selected_id, **updates)

    def resize(self, w: float | None = None, h: float | None = None) -> FloorItem | None:
        updates = {}
        if w is not None:
            updates["w"] = _clamp_size(w)
        if h is not None:
            updates["h"] = _clamp_size(h)
        return self.update_selected(**updates)

    def rotate(self) -> FloorItem | None:
        """Turn the selected item a quarter turn clockwise, wrapping 270 -> 0."""
        item = self.selected_item
        if item is None:
            return None
        return self.update_selected(rotation=(item.rotation + ROTATION_STEP) % 360)

    def set_connectivity(self, connectivity: Connectivity) -> FloorItem | None:
        return self.update_selected(connectivity=connectivity)

    def cycle_connectivity(self) -> FloorItem | None:
        item = self.selected_item
        if item is None:
            return None
        index = CONNECTIVITY_ORDER.index(item.connectivity)
        return self.set_connectivity(CONNECTIVITY_ORDER[(index + 1) % len(CONNECTIVITY_ORDER)])

    # -- internals -----------------------------------------------------------

    def _index_of(self, item_id: str, *, missing_ok: bool = False) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        if missing_ok:
            return None
        raise KeyError(item_id)

    def _replace(self, item_id: str, **updates) -> FloorItem:
        index = self._index_of(item_id)
        current = self._items[index]
        # Round-trip through validation so rotation and enum values stay legal
        updated = FloorItem.model_validate({**current.model_dump(), **updates})
        self._items[index] = updated
        return updated.model_copy()

    @staticmethod
    def _check_unique_ids(items: list[FloorItem]) -> None:
        seen: set[str] = set()
        for item in items:
            if item.id in seen:
                raise ValueError(f"Duplicate floor item id: {item.id}")
            seen.add(item.id)
