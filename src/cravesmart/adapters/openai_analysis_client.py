"""OpenAI Responses API client for meal analysis."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from cravesmart.domain.analysis import ImageInput
from cravesmart.services.analysis import AnalysisClient, to_data_url


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        image: ImageInput | None,
    ) -> dict[str, object]:
        """Send the prompt and optional photo, and parse the JSON reply."""
        content: list[dict[str, str]] = [{"type": "input_text", "text": prompt}]
        if image is not None:
            content.append({"type": "input_image", "image_url": to_data_url(image)})
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_analysis",
                    "strict": False,
                    "schema": schema,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
