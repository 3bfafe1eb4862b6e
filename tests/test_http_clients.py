"""Tests for HTTP-based adapters."""

import asyncio
import json

import pytest

from diet_tracker.adapters.openai_vision_client import OpenAIVisionClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def _extract(client: OpenAIVisionClient, reasoning_effort: str | None) -> object:
    return asyncio.run(
        client.extract(
            model="gpt-5.2",
            reasoning_effort=reasoning_effort,
            store=False,
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            schema={"type": "object"},
            prompt="Estimate nutrition",
        )
    )


def test_openai_vision_client_parses_output() -> None:
    payload = {"name": "Toast", "calories": 180, "protein": 6, "carbs": 30, "fats": 3}
    fake = _FakeOpenAI(json.dumps(payload))
    client = OpenAIVisionClient(client=fake)

    result = _extract(client, "low")

    assert result == payload
    sent = fake.responses.last_payload
    assert sent is not None
    assert sent["reasoning"] == {"effort": "low"}
    assert sent["text"]["format"]["name"] == "meal_analysis"  # type: ignore[index]


def test_openai_vision_client_omits_reasoning_when_unset() -> None:
    fake = _FakeOpenAI(json.dumps({}))
    client = OpenAIVisionClient(client=fake)

    _extract(client, None)

    assert fake.responses.last_payload is not None
    assert "reasoning" not in fake.responses.last_payload


def test_openai_vision_client_rejects_empty_output() -> None:
    client = OpenAIVisionClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        _extract(client, None)


def test_openai_vision_client_rejects_malformed_output() -> None:
    client = OpenAIVisionClient(client=_FakeOpenAI("Sorry, no food found"))

    with pytest.raises(RuntimeError):
        _extract(client, None)
