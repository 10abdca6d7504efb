"""Session endpoints: create/inspect sessions, edit specs and mode, run generation."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ..models.schemas import Mode, RoomSpecs
from ..presentation import render_view
from ..session import Session, delete_session, get_session, list_sessions, new_session
from ..tools.llm import DesignServiceClient
from ..workflow.generate import run_generation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


class ModeRequest(BaseModel):
    mode: Mode


def get_design_client(request: Request) -> DesignServiceClient:
    """Shared client, built on first use so the app imports without credentials."""
    client = getattr(request.app.state, "design_client", None)
    if client is None:
        client = DesignServiceClient()
        request.app.state.design_client = client
    return client


def require_session(session_id: str) -> Session:
    session = get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("")
async def create_session() -> dict:
    session = new_session()
    return {"session_id": session.session_id}


@router.get("")
async def list_all() -> list[dict]:
    return [{"session_id": s.session_id, "mode": s.mode, "status": render_view(s)["status"]} for s in list_sessions()]


@router.get("/{session_id}")
async def get_view(session: Session = Depends(require_session)) -> dict:
    return render_view(session)


@router.delete("/{session_id}")
async def remove_session(session_id: str) -> dict:
    if not delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"deleted": session_id}


@router.put("/{session_id}/specs")
async def update_specs(specs: RoomSpecs, session: Session = Depends(require_session)) -> dict:
    session.set_specs(specs)
    return render_view(session)


@router.put("/{session_id}/mode")
async def update_mode(body: ModeRequest, session: Session = Depends(require_session)) -> dict:
    session.set_mode(body.mode)
    return render_view(session)


@router.post("/{session_id}/generate")
async def generate(
    session: Session = Depends(require_session),
    client: DesignServiceClient = Depends(get_design_client),
) -> dict:
    """Generate the plan, then the rendering, and return the updated view.

    The plan is visible on the session while the rendering is still loading.
    The loading flag is the only guard against overlapping runs.
    """
    if session.is_loading:
        raise HTTPException(status_code=409, detail="Generation already in progress")

    session.begin_generation()
    try:
        outcome = await run_generation(
            client, session.specs, session.mode, session.editor.items, on_plan=session.apply_plan,
        )
    except Exception:
        logger.exception("Session %s: generation crashed", session.session_id)
        session.is_loading = False
        raise

    if outcome.plan.ok:
        session.apply_image(outcome.image)
    logger.info(
        "Session %s: generation finished (plan=%s, image=%s)",
        session.session_id, outcome.plan.ok, outcome.image.ok,
    )
    return render_view(session)
