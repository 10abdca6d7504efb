"""Pydantic models for the Roof Designer session and generation results."""

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

ItemType = Literal[
    "stairs", "kitchen", "sofa", "desk", "bath", "door", "outdoor_seating", "bed", "plant",
]
Connectivity = Literal["open", "partition", "enclosed"]
Zone = Literal["indoor", "outdoor"]
Mode = Literal["auto", "manual"]

CONNECTIVITY_ORDER: tuple[Connectivity, ...] = ("open", "partition", "enclosed")
ROTATION_STEP = 90


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, accepting either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Room specification (form input) ---


class RoomSpecs(CamelModel):
    total_area: float = Field(gt=0, description="Built area in square metres")
    features: list[str] = Field(default_factory=list, description="Required zones, in order")
    style: str = ""
    constraints: str = ""


# --- Floor plan ---


class FloorItem(CamelModel):
    """A placeable block on the floor-plan canvas.

    Position and size are percentages of the canvas. x/y are not clamped and
    may fall outside [0, 100]; w/h are kept within [5, 80] by the editor only.
    """

    id: str
    type: ItemType
    label: str
    x: float
    y: float
    w: float
    h: float
    rotation: int = 0
    connectivity: Connectivity = "open"
    zone: Zone = "indoor"
    color: str = ""
    icon: str = ""

    @field_validator("rotation")
    @classmethod
    def _quarter_turns(cls, value: int) -> int:
        value %= 360
        if value % ROTATION_STEP:
            raise ValueError("rotation must be a multiple of 90 degrees")
        return value


# --- Generated design ---
# Any JSON object from the service is accepted; odd value types are read as text.


class LenientModel(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class AreaBreakdown(LenientModel):
    zone: str = ""
    area: str = ""  # estimated sqm, free text from the model
    description: str = ""


class DesignResponse(LenientModel):
    concept_name: str = ""
    design_philosophy: str = ""
    spatial_arrangement: str = ""
    area_breakdown: list[AreaBreakdown] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    lighting: str = ""
    furniture_recommendations: list[str] = Field(default_factory=list)

    @field_validator("area_breakdown", "materials", "furniture_recommendations", mode="before")
    @classmethod
    def _loose_list(cls, value, info: ValidationInfo):
        if isinstance(value, (str, int, float, dict)):
            value = [value]
        if not isinstance(value, list):
            return value
        if info.field_name == "area_breakdown":
            return [{"description": item} if isinstance(item, str) else item for item in value]
        return [item if isinstance(item, str) else json.dumps(item, ensure_ascii=False) for item in value]
