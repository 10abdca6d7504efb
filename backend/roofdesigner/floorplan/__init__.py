from .editor import ContainerRect, DragState, FloorPlanEditor, classify_zone, to_percent
from .layouts import INITIAL_ITEMS, default_specs, initial_items

__all__ = [
    "ContainerRect",
    "DragState",
    "FloorPlanEditor",
    "classify_zone",
    "to_percent",
    "INITIAL_ITEMS",
    "default_specs",
    "initial_items",
]
