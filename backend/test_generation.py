"""Tests for the generation workflow, session state updates and the view projection."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from roofdesigner.floorplan import INITIAL_ITEMS
from roofdesigner.models.outcome import ImageOutcome, PlanOutcome
from roofdesigner.models.schemas import DesignResponse
from roofdesigner.presentation import LOADING_PLACEHOLDER, NO_IMAGE_TEXT, TIP_TEXT, render_view
from roofdesigner.session import GENERATION_ERROR_MESSAGE, Session
from roofdesigner.tools.errors import GenerationError, NoImageError
from roofdesigner.workflow.generate import active_items, run_generation

PLAN = DesignResponse(
    concept_name="واحة السطح",
    design_philosophy="انسيابية",
    spatial_arrangement="توزيع مفتوح",
    materials=["باركيه"],
    lighting="إضاءة مخفية",
    furniture_recommendations=["مكتب L"],
)
IMAGE = "data:image/png;base64,QUJD"


def _fake_client(plan=PLAN, image=IMAGE):
    """A DesignServiceClient double; pass an exception instance to make a step fail."""
    client = MagicMock()
    client.request_plan = AsyncMock(side_effect=plan if isinstance(plan, Exception) else None, return_value=plan)
    client.request_visualization = AsyncMock(
        side_effect=image if isinstance(image, Exception) else None, return_value=image,
    )
    return client


async def _generate(session: Session, client) -> None:
    """Drive a session through one run the way the generate endpoint does."""
    session.begin_generation()
    outcome = await run_generation(client, session.specs, session.mode, session.editor.items, on_plan=session.apply_plan)
    if outcome.plan.ok:
        session.apply_image(outcome.image)


def _manual_session() -> Session:
    session = Session(session_id="s1")
    session.set_mode("manual")
    return session


# --- Workflow ---


class TestRunGeneration:
    @pytest.mark.asyncio
    async def test_success(self):
        client = _fake_client()
        outcome = await run_generation(client, Session(session_id="s").specs, "auto")
        assert outcome.succeeded
        assert outcome.plan.plan == PLAN
        assert outcome.image.image_url == IMAGE
        client.request_visualization.assert_awaited_once()
        assert client.request_visualization.await_args.args[1] == "واحة السطح"

    @pytest.mark.asyncio
    async def test_plan_failure_skips_image(self):
        client = _fake_client(plan=GenerationError("empty"))
        outcome = await run_generation(client, Session(session_id="s").specs, "auto")
        assert not outcome.plan.ok
        assert not outcome.image.attempted
        client.request_visualization.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_network_failure_is_plan_failure(self):
        client = _fake_client(plan=ConnectionError("boom"))
        outcome = await run_generation(client, Session(session_id="s").specs, "auto")
        assert not outcome.plan.ok
        assert "boom" in outcome.plan.error

    @pytest.mark.asyncio
    async def test_image_failure_keeps_plan(self):
        client = _fake_client(image=NoImageError("No image generated"))
        outcome = await run_generation(client, Session(session_id="s").specs, "auto")
        assert outcome.partial
        assert outcome.plan.plan == PLAN
        assert outcome.image.attempted and not outcome.image.ok

    @pytest.mark.asyncio
    async def test_auto_mode_ignores_layout(self):
        client = _fake_client()
        await run_generation(client, Session(session_id="s").specs, "auto", list(INITIAL_ITEMS))
        assert client.request_plan.await_args.args[1] is None
        assert client.request_visualization.await_args.args[2] is None

    @pytest.mark.asyncio
    async def test_manual_mode_sends_layout(self):
        client = _fake_client()
        await run_generation(client, Session(session_id="s").specs, "manual", list(INITIAL_ITEMS))
        assert client.request_plan.await_args.args[1] == list(INITIAL_ITEMS)
        assert client.request_visualization.await_args.args[2] == list(INITIAL_ITEMS)

    @pytest.mark.asyncio
    async def test_snapshot_isolated_from_later_edits(self):
        session = _manual_session()
        client = _fake_client()
        items = session.editor.items

        async def edit_during_request(specs, layout):
            session.editor.select("sofa")
            session.editor.rotate()
            session.specs.constraints = "changed"
            return PLAN

        client.request_plan.side_effect = edit_during_request
        await run_generation(client, session.specs, session.mode, items)
        sent_specs, sent_items = client.request_visualization.await_args.args[0], client.request_visualization.await_args.args[2]
        assert sent_specs.constraints != "changed"
        assert next(i for i in sent_items if i.id == "sofa").rotation == 0

    @pytest.mark.asyncio
    async def test_plan_reported_before_image_request(self):
        client = _fake_client()
        seen = []

        def on_plan(outcome):
            seen.append((outcome.plan, client.request_visualization.await_count))

        await run_generation(client, Session(session_id="s").specs, "auto", on_plan=on_plan)
        assert seen == [(PLAN, 0)]
        client.request_visualization.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_plan_is_reported(self):
        seen = []
        await run_generation(_fake_client(plan=GenerationError("bad")), Session(session_id="s").specs, "auto", on_plan=seen.append)
        assert len(seen) == 1
        assert not seen[0].ok


def test_active_items():
    assert active_items("auto", list(INITIAL_ITEMS)) is None
    assert active_items("manual", []) == []
    assert [i.id for i in active_items("manual", list(INITIAL_ITEMS))] == [i.id for i in INITIAL_ITEMS]


# --- Session state + view ---


class TestSessionOutcome:
    @pytest.mark.asyncio
    async def test_partial_failure_view(self):
        session = _manual_session()
        await _generate(session, _fake_client(image=NoImageError("none")))

        view = render_view(session)
        assert view["status"] == "result"
        assert view["error"] is None
        assert view["results"]["design"]["conceptName"] == "واحة السطح"
        assert view["results"]["design"]["furnitureRecommendations"] == ["مكتب L"]
        assert view["results"]["image"] == {"state": "missing", "url": None, "text": NO_IMAGE_TEXT}
        assert not session.is_loading

    @pytest.mark.asyncio
    async def test_full_failure_view(self):
        session = _manual_session()
        await _generate(session, _fake_client(plan=GenerationError("bad")))

        view = render_view(session)
        assert view["status"] == "error"
        assert view["error"] == GENERATION_ERROR_MESSAGE
        assert view["results"] is None
        assert session.design_result is None
        assert session.generated_image_url is None
        assert not session.is_loading

    @pytest.mark.asyncio
    async def test_success_view(self):
        session = Session(session_id="s")
        await _generate(session, _fake_client())
        image = render_view(session)["results"]["image"]
        assert image["state"] == "ready"
        assert image["url"] == IMAGE

    def test_plan_shown_while_image_loading(self):
        session = Session(session_id="s")
        session.begin_generation()
        session.apply_plan(PlanOutcome(ok=True, plan=PLAN))

        view = render_view(session)
        assert session.is_loading
        assert view["status"] == "loading"
        assert view["results"]["design"]["conceptName"] == "واحة السطح"
        assert view["results"]["image"]["state"] == "loading"

        session.apply_image(ImageOutcome(ok=True, image_url=IMAGE))
        assert not session.is_loading
        assert render_view(session)["status"] == "result"

    def test_failed_plan_ends_loading(self):
        session = Session(session_id="s")
        session.begin_generation()
        session.apply_plan(PlanOutcome(ok=False, error="bad"))
        assert not session.is_loading
        assert session.error == GENERATION_ERROR_MESSAGE

    def test_new_run_clears_previous_results(self):
        session = Session(session_id="s", design_result=PLAN, generated_image_url=IMAGE, error="old")
        session.begin_generation()
        assert session.design_result is None
        assert session.generated_image_url is None
        assert session.error is None
        assert session.is_loading


class TestView:
    def test_empty_state_per_mode(self):
        session = Session(session_id="s")
        view = render_view(session)
        assert view["status"] == "empty"
        assert view["editor"] is None
        assert view["tip"] == TIP_TEXT["auto"]
        assert view["generate"]["disabled"] is False

        session.set_mode("manual")
        view = render_view(session)
        assert view["tip"] == TIP_TEXT["manual"]
        assert len(view["editor"]["items"]) == len(INITIAL_ITEMS)
        assert view["editor"]["selected"] is None
        assert view["editor"]["hint"]

    def test_loading_placeholder(self):
        session = Session(session_id="s")
        session.begin_generation()
        view = render_view(session)
        assert view["status"] == "loading"
        assert view["results"]["design"]["conceptName"] == LOADING_PLACEHOLDER.concept_name
        assert view["results"]["image"]["state"] == "loading"
        assert view["generate"]["disabled"] is True

    def test_item_presentation_hints(self):
        session = _manual_session()
        session.editor.select("bath")
        view = render_view(session)["editor"]
        by_id = {item["id"]: item for item in view["items"]}
        assert by_id["bath"]["selected"] is True
        assert by_id["bath"]["border"] == "double"
        assert by_id["bath"]["badge"] == "enclosed"
        assert by_id["desk"]["border"] == "side"
        assert by_id["sofa"]["badge"] is None
        # the sliding door is 2% tall, too thin for a label
        assert by_id["door"]["show_label"] is False
        assert by_id["kitchen"]["show_label"] is True
        assert by_id["outdoor"]["zone_label"] == "خارجي"
        assert view["selected"]["id"] == "bath"
        assert view["hint"] is None
