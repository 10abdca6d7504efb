"""Prompt template and output schema for the structured design plan."""

from ..floorplan.layouts import STUDIO_AREA_SQM
from ..models.schemas import FloorItem, RoomSpecs

LAYOUT_PLACEHOLDER = "Optimized by architect based on constraints."

_CONNECTIVITY_PHRASES = {
    "enclosed": "fully enclosed room",
    "partition": "semi-private with partition",
}


def vertical_position(y: float) -> str:
    return "rear/window side" if y < 50 else "front/entrance side"


def horizontal_position(x: float) -> str:
    return "left" if x < 50 else "right"


def connectivity_phrase(connectivity: str) -> str:
    return _CONNECTIVITY_PHRASES.get(connectivity, "open plan")


def describe_layout(items: list[FloorItem] | None) -> str:
    """Describe a manual layout zone by zone, keeping insertion order in each zone.

    Returns an empty string when there is nothing to describe.
    """
    if not items:
        return ""

    indoor = [item for item in items if item.zone == "indoor"]
    outdoor = [item for item in items if item.zone == "outdoor"]

    lines = ["User has manually engineered the layout with specific constraints:"]
    if indoor:
        lines.append(f"INDOOR ZONE ({STUDIO_AREA_SQM}sqm):")
        for item in indoor:
            lines.append(
                f"- {item.label}: Located at {vertical_position(item.y)} {horizontal_position(item.x)}. "
                f"Rotated {item.rotation}°. Structure: {connectivity_phrase(item.connectivity)}."
            )
    if outdoor:
        lines.append("OUTDOOR ROOFTOP ZONE:")
        for item in outdoor:
            lines.append(
                f"- {item.label}: Located outside on the artificial grass. Rotated {item.rotation}°."
            )
    return "\n".join(lines) + "\n"


def build_plan_prompt(specs: RoomSpecs, items: list[FloorItem] | None = None) -> str:
    """Build the prompt for the Arabic technical execution plan.

    Use with `DesignServiceClient.request_plan`, which attaches
    DESIGN_RESPONSE_SCHEMA as the structured-output contract.
    """
    layout = describe_layout(items) or LAYOUT_PLACEHOLDER
    features = ", ".join(specs.features) if specs.features else "architect's choice"

    return f"""\
Role: Expert Interior Architect & Civil Engineer.
Task: Create a detailed technical execution plan for a rooftop studio ({STUDIO_AREA_SQM} sqm built area + outdoor terrace).
Language: Arabic (Output must be in Arabic).

Project Specifications:
- Total Built Area: {specs.total_area:g} square meters.
- Required Zones: {features}.
- Design Style: {specs.style or "Modern Contemporary"}.
- Structural Constraints: {specs.constraints or "none"}.
- User Layout & Engineering Constraints:
{layout}

Required Detailed Analysis (JSON):
1. **Spatial Arrangement**: Describe the flow based on the user's manual placement. Explain how the "Enclosed" vs "Open" choices affect the space.
2. **Furniture Plan**: Specific furniture dimensions and orientations based on user rotation input.
3. **Lighting Plan**: Lighting for indoor zones and outdoor extensions.
4. **Materials & Colors**: Interior finishes contrasting with the outdoor artificial grass.

Output Format: JSON only conforming to the schema."""


# Structured-output contract, keyed the way DesignResponse serialises (camelCase)
DESIGN_RESPONSE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "conceptName": {
            "type": "string",
            "description": "Creative name for the design concept in Arabic",
        },
        "designPhilosophy": {
            "type": "string",
            "description": "Brief explanation of the flow and vibe in Arabic",
        },
        "spatialArrangement": {
            "type": "string",
            "description": "Detailed layout description answering how zones fit together in Arabic",
        },
        "areaBreakdown": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "zone": {"type": "string"},
                    "area": {"type": "string", "description": "Estimated sqm"},
                    "description": {"type": "string", "description": "Furniture placement and logic"},
                },
                "required": ["zone", "area", "description"],
                "additionalProperties": False,
            },
        },
        "materials": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Flooring, walls, and coordination with outdoor grass",
        },
        "lighting": {
            "type": "string",
            "description": "Detailed lighting strategy (General, Task, Decorative)",
        },
        "furnitureRecommendations": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Specific furniture pieces including L-desk details",
        },
    },
    "required": [
        "conceptName",
        "designPhilosophy",
        "spatialArrangement",
        "areaBreakdown",
        "materials",
        "lighting",
        "furnitureRecommendations",
    ],
    "additionalProperties": False,
}
