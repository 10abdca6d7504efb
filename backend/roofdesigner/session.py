"""In-memory design sessions: the single owner of specs, layout and results.

Nothing is persisted; sessions live until the process restarts.
"""

import logging
import uuid
from dataclasses import dataclass, field

from .floorplan.editor import FloorPlanEditor
from .floorplan.layouts import default_specs
from .models.outcome import ImageOutcome, PlanOutcome
from .models.schemas import DesignResponse, Mode, RoomSpecs

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "حدث خطأ أثناء إنشاء التصميم. يرجى المحاولة مرة أخرى."


@dataclass
class Session:
    session_id: str
    specs: RoomSpecs = field(default_factory=default_specs)
    mode: Mode = "auto"
    editor: FloorPlanEditor = field(default_factory=FloorPlanEditor)
    is_loading: bool = False
    design_result: DesignResponse | None = None
    generated_image_url: str | None = None
    error: str | None = None

    def set_specs(self, specs: RoomSpecs) -> None:
        self.specs = specs

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode
        if mode == "manual":
            self.editor.seed_if_empty()

    def begin_generation(self) -> None:
        """Enter the loading state with results from any earlier run cleared."""
        self.is_loading = True
        self.error = None
        self.design_result = None
        self.generated_image_url = None

    def apply_plan(self, outcome: PlanOutcome) -> None:
        """Show the plan as soon as it exists; a failed plan ends the run."""
        if outcome.ok:
            self.design_result = outcome.plan
            return
        self.error = GENERATION_ERROR_MESSAGE
        self.is_loading = False

    def apply_image(self, outcome: ImageOutcome) -> None:
        """Record the rendering, if there is one, and leave the loading state."""
        self.generated_image_url = outcome.image_url if outcome.ok else None
        self.is_loading = False


# session_id -> Session
_sessions: dict[str, Session] = {}


def new_session() -> Session:
    session = Session(session_id=uuid.uuid4().hex[:16])
    _sessions[session.session_id] = session
    logger.info("Created session %s", session.session_id)
    return session


def get_session(session_id: str) -> Session | None:
    return _sessions.get(session_id)


def list_sessions() -> list[Session]:
    return list(_sessions.values())


def delete_session(session_id: str) -> bool:
    return _sessions.pop(session_id, None) is not None
