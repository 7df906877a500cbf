"""Tests for the hosted model adapters."""

import asyncio
import json

import pytest

from cravesmart.adapters.gemini_analysis_client import GeminiAnalysisClient
from cravesmart.adapters.openai_analysis_client import OpenAIAnalysisClient
from cravesmart.domain.analysis import ImageInput
from tests.conftest import PNG_BYTES, sample_meal_payload


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
        self.closed = False

    async def close(self) -> None:
        self.closed = True


class _FakeGeminiModels:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.last_kwargs: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return type("Resp", (), {"text": self.text})()


class _FakeGemini:
    def __init__(self, text: str | None) -> None:
        self.models = _FakeGeminiModels(text)
        self.aio = self


def test_openai_client_sends_image_and_schema() -> None:
    fake = _FakeOpenAI(json.dumps(sample_meal_payload()))
    client = OpenAIAnalysisClient(
        client=fake, model="gpt-4.1-mini", reasoning_effort="low"
    )

    result = asyncio.run(
        client.generate(
            prompt="Analyse this meal",
            schema={"type": "object"},
            image=ImageInput(data=b"abc", mime_type="image/png"),
        )
    )

    payload = fake.responses.last_payload
    content = payload["input"][0]["content"]
    assert result["detectedMealName"] == "Paneer Tikka"
    assert content[0] == {"type": "input_text", "text": "Analyse this meal"}
    assert content[1]["image_url"] == "data:image/png;base64,YWJj"
    assert payload["text"]["format"]["schema"] == {"type": "object"}
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["store"] is False


def test_openai_client_without_image_sends_text_only() -> None:
    fake = _FakeOpenAI("{}")
    client = OpenAIAnalysisClient(client=fake, model="gpt-4.1-mini")

    asyncio.run(client.generate(prompt="Plan my day", schema={}, image=None))

    assert len(fake.responses.last_payload["input"][0]["content"]) == 1
    assert "reasoning" not in fake.responses.last_payload


def test_openai_client_rejects_empty_output() -> None:
    client = OpenAIAnalysisClient(client=_FakeOpenAI(""), model="gpt-4.1-mini")

    with pytest.raises(RuntimeError):
        asyncio.run(client.generate(prompt="x", schema={}, image=None))


def test_openai_client_close() -> None:
    fake = _FakeOpenAI("{}")

    asyncio.run(OpenAIAnalysisClient(client=fake, model="m").close())

    assert fake.closed is True


def test_gemini_client_parses_json_reply() -> None:
    fake = _FakeGemini(json.dumps(sample_meal_payload()))
    client = GeminiAnalysisClient(client=fake, model="gemini-2.0-flash")

    result = asyncio.run(
        client.generate(
            prompt="Analyse this meal",
            schema={},
            image=ImageInput(data=PNG_BYTES, mime_type="image/png"),
        )
    )

    kwargs = fake.models.last_kwargs
    parts = kwargs["contents"][0].parts
    assert result["estimatedCalories"] == 420
    assert kwargs["model"] == "gemini-2.0-flash"
    assert kwargs["config"].response_mime_type == "application/json"
    assert parts[0].text == "Analyse this meal"
    assert parts[1].inline_data.mime_type == "image/png"


def test_gemini_client_rejects_empty_reply() -> None:
    client = GeminiAnalysisClient(client=_FakeGemini(None), model="m")

    with pytest.raises(RuntimeError):
        asyncio.run(client.generate(prompt="x", schema={}, image=None))
