"""Prompt template for the photorealistic rendering of the studio."""

from ..models.schemas import FloorItem, RoomSpecs

IMAGE_ASPECT_RATIO = "16:9"

DEFAULT_STYLE = "Modern Contemporary"

GENERIC_LAYOUT = """\
1. Foreground Right: Black metal spiral staircase structure.
2. Main Space: Open plan with a cozy living area and kitchen bar.
3. Workspace: A dedicated corner with L-shaped desk.
4. Background: Large Aluminum sliding glass doors opening to green grass."""

_ENCLOSURE_PHRASES = {
    "enclosed": "inside a walled room",
    "partition": "behind a partition",
}


def depth_bucket(y: float) -> str:
    if y < 30:
        return "far background"
    if y < 60:
        return "mid-ground"
    return "foreground"


def side_bucket(x: float) -> str:
    if x < 33:
        return "left"
    if x < 66:
        return "center"
    return "right"


def zone_context(zone: str) -> str:
    return "OUTSIDE on the grass terrace" if zone == "outdoor" else "INSIDE the studio"


def enclosure_phrase(connectivity: str) -> str:
    return _ENCLOSURE_PHRASES.get(connectivity, "in open space")


def depth_ordered(items: list[FloorItem]) -> list[FloorItem]:
    """Items back to front (ascending y); ties keep insertion order."""
    return sorted(items, key=lambda item: item.y)


def describe_scene(items: list[FloorItem] | None) -> str:
    if not items:
        return GENERIC_LAYOUT

    lines = ["STRICTLY FOLLOW THIS STRUCTURAL LAYOUT:"]
    for item in depth_ordered(items):
        lines.append(
            f"- {item.label} ({item.type}): Positioned {depth_bucket(item.y)} {side_bucket(item.x)} "
            f"{zone_context(item.zone)}. Orientation: {item.rotation} degrees. "
            f"Context: {enclosure_phrase(item.connectivity)}."
        )
    return "\n".join(lines)


def build_image_prompt(
    specs: RoomSpecs,
    concept_name: str | None = None,
    items: list[FloorItem] | None = None,
) -> str:
    """Build the rendering prompt; send with aspect ratio IMAGE_ASPECT_RATIO."""
    concept = f' for the design concept "{concept_name}"' if concept_name else ""

    return f"""\
Photorealistic architectural interior render, 8k resolution, cinematic lighting.
Subject: A modern {specs.total_area:g} sqm rooftop studio apartment with an attached outdoor terrace{concept}.
Viewpoint: Wide angle looking from the entrance/staircase area towards the outdoor sliding doors.

Specific Layout Requirements:
{describe_scene(items)}

Key Details:
- Outdoors: Vibrant green artificial grass visible through the large sliding glass doors or directly if items are placed outside.
- Style: {specs.style or DEFAULT_STYLE}.
- Atmosphere: Bright, organized, highly functional.
- Colors: Neutral tones with warm wood accents.
- Aspect ratio: {IMAGE_ASPECT_RATIO} landscape."""
