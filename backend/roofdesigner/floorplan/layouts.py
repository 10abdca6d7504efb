"""Seed data for new sessions: default room specs and the starter rooftop layout.

The starter layout models the 46 sqm rooftop studio: spiral stairs at the
entrance (front right), a sliding door on the line between the studio and the
artificial-grass terrace, and one outdoor seating block above that line.
"""

from ..models.schemas import FloorItem, RoomSpecs

# Built area of the indoor studio, quoted in the plan prompt's zone header.
STUDIO_AREA_SQM = 46

DEFAULT_FEATURES = ["مطبخ بار", "انتريه", "حمام ضيوف", "مكتب عمل L"]


def default_specs() -> RoomSpecs:
    return RoomSpecs(
        total_area=STUDIO_AREA_SQM,
        features=list(DEFAULT_FEATURES),
        style="Modern Contemporary",
        constraints=(
            "السلم دوران جاي من تحت على اليمين في بداية المساحة. "
            "باب جرار ألوميتال بيبص على باقي الروف الخارجي (أرضية نجيله صناعي)."
        ),
    )


# =============================================================================
# Starter layout, in insertion (z) order
# =============================================================================

INITIAL_ITEMS: tuple[FloorItem, ...] = (
    FloorItem(
        id="stairs", type="stairs", label="سلم دوران",
        x=80, y=80, w=15, h=15, connectivity="open", zone="indoor",
        color="bg-gray-800", icon="stairs",
    ),
    FloorItem(
        id="door", type="door", label="باب جرار",
        x=35, y=25, w=30, h=2, connectivity="open", zone="indoor",
        color="bg-blue-500", icon="door",
    ),
    FloorItem(
        id="kitchen", type="kitchen", label="مطبخ بار",
        x=60, y=40, w=25, h=15, connectivity="open", zone="indoor",
        color="bg-orange-200", icon="kitchen",
    ),
    FloorItem(
        id="sofa", type="sofa", label="انتريه",
        x=10, y=40, w=25, h=20, connectivity="open", zone="indoor",
        color="bg-emerald-200", icon="sofa",
    ),
    FloorItem(
        id="desk", type="desk", label="مكتب L",
        x=10, y=10, w=20, h=15, connectivity="partition", zone="indoor",
        color="bg-purple-200", icon="desk",
    ),
    FloorItem(
        id="bath", type="bath", label="حمام ضيوف",
        x=75, y=5, w=20, h=20, connectivity="enclosed", zone="indoor",
        color="bg-cyan-100", icon="bath",
    ),
    FloorItem(
        id="outdoor", type="outdoor_seating", label="جلسة خارجية",
        x=20, y=-15, w=20, h=15, connectivity="open", zone="outdoor",
        color="bg-green-100", icon="outdoor",
    ),
)


def initial_items() -> list[FloorItem]:
    """Fresh copies of the starter layout."""
    return [item.model_copy() for item in INITIAL_ITEMS]
