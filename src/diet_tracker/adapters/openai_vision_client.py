"""OpenAI client that estimates meal nutrition from a photo."""

import json
import logging
from dataclasses import dataclass

from openai import AsyncOpenAI

from diet_tracker.services.vision import VisionClient

logger = logging.getLogger(__name__)

SCHEMA_NAME = "meal_analysis"


@dataclass
class OpenAIVisionClient(VisionClient):
    """Sends a meal photo and prompt to the Responses API and returns the JSON
    estimate constrained by the meal analysis schema."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Return the model's meal estimate as a JSON object."""
        request = _meal_request(model, store, image_data_url, schema, prompt)
        if reasoning_effort:
            request["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request)
        if not response.output_text:
            raise RuntimeError("OpenAI returned no meal analysis")
        logger.debug("Received meal analysis", extra={"model": model})
        try:
            return json.loads(response.output_text)
        except json.JSONDecodeError as exc:
            raise RuntimeError("OpenAI returned malformed meal analysis") from exc

    async def close(self) -> None:
        await self.client.close()


def _meal_request(
    model: str,
    store: bool,
    image_data_url: str,
    schema: dict[str, object],
    prompt: str,
) -> dict[str, object]:
    photo_message = {
        "role": "user",
        "content": [
            {"type": "input_text", "text": prompt},
            {"type": "input_image", "image_url": image_data_url},
        ],
    }
    output_format = {
        "type": "json_schema",
        "name": SCHEMA_NAME,
        "strict": True,
        "schema": schema,
    }
    return {
        "model": model,
        "input": [photo_message],
        "text": {"format": output_format},
        "store": store,
    }
