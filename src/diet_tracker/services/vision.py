"""Meal photo analysis using LLMs."""

import base64
import binascii
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.vision import MealAnalysis

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 50, "maximum": 1000},
        "protein": {"type": "number", "minimum": 0, "maximum": 100},
        "carbs": {"type": "number", "minimum": 0, "maximum": 200},
        "fats": {"type": "number", "minimum": 0, "maximum": 100},
    },
    "required": ["name", "calories", "protein", "carbs", "fats"],
    "additionalProperties": False,
}

ANALYSIS_PROMPT = (
    "Identify the food in the image and estimate nutrition for a single serving. "
    "Return a brief name, total calories and grams of protein, carbs and fats, "
    "rounded to one decimal place. Be conservative with estimates."
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


class ImageAnalyzer(Protocol):
    """Capability that turns a meal photo into nutrition fields."""

    async def analyze(self, image_data_url: str) -> MealAnalysis:
        """Return a nutrition estimate for the photo."""


@dataclass
class VisionService(ImageAnalyzer):
    """Image analyzer that prompts a vision model and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_data_url: str) -> MealAnalysis:
        """Analyze a photo given as a data URL."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=image_data_url,
            schema=ANALYSIS_SCHEMA,
            prompt=ANALYSIS_PROMPT,
        )
        return MealAnalysis.model_validate(raw)


def normalize_image(value: str) -> str:
    """Return a data URL for either a data URL or bare base64 image payload.

    Raises ValueError when the value is neither, or when a bare payload is not
    a JPEG, PNG or WebP image.
    """
    candidate = value.strip()
    if is_image_data_url(candidate):
        return candidate
    try:
        image_bytes = base64.b64decode(candidate, validate=True)
    except binascii.Error as exc:
        raise ValueError("image must be a data URL or base64 payload") from exc
    mime_type = _sniff_mime_type(image_bytes)
    if mime_type is None:
        raise ValueError("image payload is not a JPEG, PNG or WebP image")
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def is_image_data_url(value: str) -> bool:
    """Return True when the value looks like a base64 image data URL."""
    header, sep, payload = value.partition(",")
    return (
        bool(sep)
        and bool(payload)
        and header.startswith("data:image/")
        and header.endswith(";base64")
    )


def _sniff_mime_type(image_bytes: bytes) -> str | None:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return None
