"""Result-bearing outcomes for the two generation steps."""

from pydantic import BaseModel

from .schemas import DesignResponse


class PlanOutcome(BaseModel):
    ok: bool
    plan: DesignResponse | None = None
    error: str = ""


class ImageOutcome(BaseModel):
    ok: bool
    attempted: bool = True
    image_url: str | None = None
    error: str = ""


class GenerationOutcome(BaseModel):
    """Plan and image results, recorded independently.

    The image step only runs after a successful plan step, so a failed plan
    always carries an unattempted image outcome.
    """

    plan: PlanOutcome
    image: ImageOutcome

    @property
    def succeeded(self) -> bool:
        return self.plan.ok and self.image.ok

    @property
    def partial(self) -> bool:
        return self.plan.ok and not self.image.ok
