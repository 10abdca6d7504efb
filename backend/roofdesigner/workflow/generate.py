"""Design generation workflow: plan first, then the rendering, each recorded on its own."""

import logging
import time
from collections.abc import Callable

from ..models.outcome import GenerationOutcome, ImageOutcome, PlanOutcome
from ..models.schemas import FloorItem, Mode, RoomSpecs
from ..tools.errors import NoImageError
from ..tools.llm import DesignServiceClient

logger = logging.getLogger(__name__)


def active_items(mode: Mode, items: list[FloorItem] | None) -> list[FloorItem] | None:
    """The layout only feeds the prompts in manual mode."""
    if mode != "manual":
        return None
    return [item.model_copy() for item in items or []]


async def generate_plan_step(
    client: DesignServiceClient,
    specs: RoomSpecs,
    items: list[FloorItem] | None,
) -> PlanOutcome:
    t0 = time.time()
    try:
        plan = await client.request_plan(specs, items)
    except Exception as exc:
        # Network and malformed-output failures are reported the same way
        logger.exception("Design plan generation failed")
        return PlanOutcome(ok=False, error=str(exc) or type(exc).__name__)

    logger.info("Plan step done in %dms", round((time.time() - t0) * 1000))
    return PlanOutcome(ok=True, plan=plan)


async def generate_image_step(
    client: DesignServiceClient,
    specs: RoomSpecs,
    concept_name: str | None,
    items: list[FloorItem] | None,
) -> ImageOutcome:
    t0 = time.time()
    try:
        image_url = await client.request_visualization(specs, concept_name, items)
    except NoImageError as exc:
        logger.warning("Visualization returned no image: %s", exc)
        return ImageOutcome(ok=False, error=str(exc))
    except Exception as exc:
        logger.exception("Visualization request failed")
        return ImageOutcome(ok=False, error=str(exc) or type(exc).__name__)

    logger.info("Image step done in %dms", round((time.time() - t0) * 1000))
    return ImageOutcome(ok=True, image_url=image_url)


async def run_generation(
    client: DesignServiceClient,
    specs: RoomSpecs,
    mode: Mode,
    items: list[FloorItem] | None = None,
    on_plan: Callable[[PlanOutcome], None] | None = None,
) -> GenerationOutcome:
    """Run the plan step and, only if it succeeds, the image step.

    Inputs are snapshotted up front so edits made while a request is in
    flight do not leak into it. ``on_plan`` receives the plan outcome before
    the image request starts.
    """
    specs = specs.model_copy(deep=True)
    layout = active_items(mode, items)

    plan = await generate_plan_step(client, specs, layout)
    if on_plan is not None:
        on_plan(plan)
    if not plan.ok:
        return GenerationOutcome(plan=plan, image=ImageOutcome(ok=False, attempted=False))

    concept_name = plan.plan.concept_name if plan.plan else None
    image = await generate_image_step(client, specs, concept_name or None, layout)
    if not image.ok:
        logger.info("Generation finished without an image; keeping the plan")
    return GenerationOutcome(plan=plan, image=image)
