"""OpenRouter client for the two generative calls: design plan (text) and rendering (image)."""

import json
import logging
import re

from openai import AsyncOpenAI
from pydantic import ValidationError

from ..config import IMAGE_MODEL, OPENROUTER_API_KEY, OPENROUTER_BASE_URL, REQUEST_TIMEOUT_S, TEXT_MODEL
from ..models.schemas import DesignResponse, FloorItem, RoomSpecs
from ..prompts.design_plan import DESIGN_RESPONSE_SCHEMA, build_plan_prompt
from ..prompts.visualization import IMAGE_ASPECT_RATIO, build_image_prompt
from .errors import GenerationError, NoImageError

logger = logging.getLogger(__name__)

_EXTRA_HEADERS = {
    "HTTP-Referer": "https://roofdesigner.app",
    "X-Title": "RoofDesigner",
}


def _extract_json(text: str) -> str:
    """Strip markdown fences or surrounding prose to isolate JSON."""
    m = re.search(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", text)
    if m:
        return m.group(1)
    m = re.search(r"(\{[\s\S]*\})", text)
    if m:
        return m.group(1)
    return text


def _as_data_url(payload: str) -> str:
    if payload.startswith("data:image"):
        return payload
    # Bare base64 inline data, PNG is what the image model emits
    return f"data:image/png;base64,{payload}"


def _extract_image_from_response(resp) -> str | None:
    """Return the first inline image in a multimodal response as a data URL."""
    if not resp.choices:
        return None
    message = resp.choices[0].message

    # OpenRouter non-standard images field
    images = getattr(message, "images", None)
    if images:
        for image in images:
            try:
                url = image["image_url"]["url"]
            except (KeyError, TypeError):
                continue
            if isinstance(url, str) and url:
                return _as_data_url(url)

    # Inline data URL in content string
    content = message.content if isinstance(message.content, str) else ""
    if content.startswith("data:image"):
        return content

    # Content array with image parts
    raw = resp.model_dump()
    choices = raw.get("choices", [])
    if choices:
        msg_content = choices[0].get("message", {}).get("content")
        if isinstance(msg_content, list):
            for part in msg_content:
                if not isinstance(part, dict):
                    continue
                img_url = part.get("image_url", {})
                if isinstance(img_url, dict) and str(img_url.get("url") or "").startswith("data:image"):
                    return img_url["url"]
                inline = part.get("inline_data") or part.get("inlineData")
                if isinstance(inline, dict) and inline.get("data"):
                    mime = inline.get("mime_type") or inline.get("mimeType") or "image/png"
                    return f"data:{mime};base64,{inline['data']}"
                text = part.get("text")
                if isinstance(text, str) and text.startswith("data:image"):
                    return text

    return None


class DesignServiceClient:
    """Sends design prompts to the generative service.

    Construct one per application (or per test) and pass it where needed; the
    underlying AsyncOpenAI client can be swapped for a fake.
    """

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        *,
        text_model: str = TEXT_MODEL,
        image_model: str = IMAGE_MODEL,
    ):
        self._client = client or AsyncOpenAI(
            base_url=OPENROUTER_BASE_URL,
            api_key=OPENROUTER_API_KEY,
            timeout=REQUEST_TIMEOUT_S,
        )
        self.text_model = text_model
        self.image_model = image_model

    async def request_plan(self, specs: RoomSpecs, items: list[FloorItem] | None = None) -> DesignResponse:
        """Generate the structured design plan. Raises GenerationError on empty output or anything but a JSON object."""
        prompt = build_plan_prompt(specs, items)

        resp = await self._client.chat.completions.create(
            model=self.text_model,
            messages=[{"role": "user", "content": prompt}],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "design_response",
                    "strict": True,
                    "schema": DESIGN_RESPONSE_SCHEMA,
                },
            },
            extra_headers=_EXTRA_HEADERS,
        )

        text = resp.choices[0].message.content if resp.choices else None
        if not text:
            raise GenerationError("Failed to generate design plan: empty response")

        try:
            data = json.loads(_extract_json(text))
        except json.JSONDecodeError as exc:
            raise GenerationError(f"Failed to generate design plan: {exc}") from exc
        if not isinstance(data, dict):
            raise GenerationError(f"Failed to generate design plan: expected a JSON object, got {type(data).__name__}")

        try:
            plan = DesignResponse.model_validate(data)
        except ValidationError as exc:
            # Only values that cannot be read as text at all end up here
            raise GenerationError(f"Failed to generate design plan: {exc}") from exc

        logger.info("Design plan generated: %s", plan.concept_name or "(unnamed)")
        return plan

    async def request_visualization(
        self,
        specs: RoomSpecs,
        concept_name: str | None = None,
        items: list[FloorItem] | None = None,
    ) -> str:
        """Render the studio. Returns a base64 data URL; raises NoImageError when no image comes back."""
        prompt = build_image_prompt(specs, concept_name, items)

        resp = await self._client.chat.completions.create(
            model=self.image_model,
            messages=[{"role": "user", "content": prompt}],
            extra_body={
                "modalities": ["image", "text"],
                "image_config": {"aspect_ratio": IMAGE_ASPECT_RATIO},
            },
            extra_headers=_EXTRA_HEADERS,
        )

        image = _extract_image_from_response(resp)
        if image is None:
            raise NoImageError("No image generated")

        logger.info("Visualization generated (%d bytes of data URL)", len(image))
        return image
