"""View projection: turns a session into the JSON the front-end renders.

Pure functions of session state. Display text is Arabic, matching the
generated plan.
"""

from .floorplan.layouts import STUDIO_AREA_SQM
from .models.schemas import DesignResponse, FloorItem
from .session import Session

NO_IMAGE_TEXT = "لا توجد صورة متاحة"
IMAGE_LOADING_TEXT = "جاري تخيل المساحة بالذكاء الاصطناعي..."
GENERATE_LABEL = "صمم مساحتي الآن ✨"
GENERATING_LABEL = "جاري التصميم..."
SELECT_HINT = "اضغط على أي عنصر للتحكم في خصائصه (الحجم، الدوران، الخصوصية)"

EMPTY_STATE_TEXT = {
    "auto": "اضغط على 'صمم مساحتي الآن' لرؤية التصميم المقترح",
    "manual": "قم بترتيب الأثاث ثم اضغط على زر التصميم",
}

TIP_TEXT = {
    "auto": f"في مساحة {STUDIO_AREA_SQM} متر، السلم الدوران يوفر مساحة ممتازة، ويمكن استغلال أسفله للتخزين.",
    "manual": "استخدم المصمم اليدوي لتحديد أماكن الفرش بدقة، وسيقوم الذكاء الاصطناعي بتحويل مخططك لصورة واقعية!",
}

ZONE_LABELS = {"indoor": "داخلي", "outdoor": "خارجي"}

CONNECTIVITY_LABELS = {
    "open": "مفتوح (Open Plan)",
    "partition": "شبه منفصل (Partition)",
    "enclosed": "مغلق (Gated/Wall)",
}

BORDER_STYLES = {"enclosed": "double", "partition": "side"}

# Shown in the results panel while the plan request is in flight
LOADING_PLACEHOLDER = DesignResponse(
    concept_name="جاري التحليل...",
    design_philosophy="...",
    spatial_arrangement="...",
)


def item_view(item: FloorItem, selected_id: str | None) -> dict:
    view = item.model_dump(by_alias=True)
    view.update(
        selected=item.id == selected_id,
        show_label=item.w > 8 and item.h > 8,
        border=BORDER_STYLES.get(item.connectivity, "none"),
        badge=item.connectivity if item.connectivity != "open" else None,
        zone_label=ZONE_LABELS[item.zone],
        connectivity_label=CONNECTIVITY_LABELS[item.connectivity],
    )
    return view


def status_of(session: Session) -> str:
    if session.error:
        return "error"
    if session.is_loading:
        return "loading"
    if session.design_result is not None:
        return "result"
    return "empty"


def image_view(session: Session) -> dict:
    if session.generated_image_url:
        return {"state": "ready", "url": session.generated_image_url, "text": None}
    if session.is_loading:
        return {"state": "loading", "url": None, "text": IMAGE_LOADING_TEXT}
    return {"state": "missing", "url": None, "text": NO_IMAGE_TEXT}


def results_view(session: Session) -> dict | None:
    if session.error or not (session.is_loading or session.design_result):
        return None
    design = session.design_result or LOADING_PLACEHOLDER
    return {
        "design": design.model_dump(by_alias=True),
        "image": image_view(session),
    }


def editor_view(session: Session) -> dict | None:
    if session.mode != "manual":
        return None
    editor = session.editor
    selected = editor.selected_item
    return {
        "items": [item_view(item, editor.selected_id) for item in editor.items],
        "selected": item_view(selected, editor.selected_id) if selected else None,
        "hint": None if selected else SELECT_HINT,
        "dragging": editor.drag.item_id if editor.drag else None,
    }


def render_view(session: Session) -> dict:
    return {
        "session_id": session.session_id,
        "mode": session.mode,
        "specs": session.specs.model_dump(by_alias=True),
        "status": status_of(session),
        "error": session.error,
        "empty_text": EMPTY_STATE_TEXT[session.mode] if status_of(session) == "empty" else None,
        "tip": TIP_TEXT[session.mode],
        "editor": editor_view(session),
        "results": results_view(session),
        "generate": {
            "label": GENERATING_LABEL if session.is_loading else GENERATE_LABEL,
            "disabled": session.is_loading,
        },
    }
