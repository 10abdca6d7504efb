"""Floor-plan editor endpoints. Each call applies one UI event and returns the updated view."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..floorplan.editor import ContainerRect
from ..models.schemas import Connectivity
from ..presentation import render_view
from ..session import Session
from .session import require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions/{session_id}/editor", tags=["editor"])


class Rect(BaseModel):
    left: float
    top: float
    width: float
    height: float

    def to_container(self) -> ContainerRect:
        return ContainerRect(self.left, self.top, self.width, self.height)


class PointerDownRequest(BaseModel):
    item_id: str
    client_x: float
    client_y: float
    rect: Rect | None = None


class PointerMoveRequest(BaseModel):
    client_x: float
    client_y: float
    rect: Rect | None = None


class SelectRequest(BaseModel):
    item_id: str | None = None


class ResizeRequest(BaseModel):
    w: float | None = None
    h: float | None = None


class ConnectivityRequest(BaseModel):
    connectivity: Connectivity | None = None  # None cycles to the next value


def _container(rect: Rect | None) -> ContainerRect | None:
    return rect.to_container() if rect else None


@router.post("/pointer-down")
async def pointer_down(body: PointerDownRequest, session: Session = Depends(require_session)) -> dict:
    try:
        session.editor.pointer_down(body.item_id, body.client_x, body.client_y, _container(body.rect))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Item {body.item_id} not found")
    return render_view(session)


@router.post("/pointer-move")
async def pointer_move(body: PointerMoveRequest, session: Session = Depends(require_session)) -> dict:
    session.editor.pointer_move(body.client_x, body.client_y, _container(body.rect))
    return render_view(session)


@router.post("/pointer-up")
async def pointer_up(session: Session = Depends(require_session)) -> dict:
    session.editor.pointer_up()
    return render_view(session)


@router.post("/select")
async def select(body: SelectRequest, session: Session = Depends(require_session)) -> dict:
    try:
        session.editor.select(body.item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Item {body.item_id} not found")
    return render_view(session)


@router.post("/resize")
async def resize(body: ResizeRequest, session: Session = Depends(require_session)) -> dict:
    session.editor.resize(w=body.w, h=body.h)
    return render_view(session)


@router.post("/rotate")
async def rotate(session: Session = Depends(require_session)) -> dict:
    session.editor.rotate()
    return render_view(session)


@router.post("/connectivity")
async def connectivity(body: ConnectivityRequest, session: Session = Depends(require_session)) -> dict:
    if body.connectivity is None:
        session.editor.cycle_connectivity()
    else:
        session.editor.set_connectivity(body.connectivity)
    return render_view(session)


@router.post("/reset")
async def reset(session: Session = Depends(require_session)) -> dict:
    session.editor.reset()
    logger.info("Session %s: floor plan reset", session.session_id)
    return render_view(session)
