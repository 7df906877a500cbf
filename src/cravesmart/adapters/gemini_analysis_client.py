"""Google Gemini client for meal analysis."""

import json
from dataclasses import dataclass

from google import genai
from google.genai import types

from cravesmart.domain.analysis import ImageInput
from cravesmart.services.analysis import AnalysisClient


@dataclass
class GeminiAnalysisClient(AnalysisClient):
    """Analysis client backed by the Gemini generate_content API."""

    client: genai.Client
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "GeminiAnalysisClient":
        """Create a Gemini analysis client."""
        return cls(client=genai.Client(api_key=api_key), model=model)

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        image: ImageInput | None,
    ) -> dict[str, object]:
        """Send the prompt and optional inline photo, and parse the JSON reply."""
        parts = [types.Part.from_text(text=prompt)]
        if image is not None:
            parts.append(
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            )
        # The schema is spelled out in the prompt; Gemini only gets the MIME type.
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[types.Content(role="user", parts=parts)],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
            ),
        )
        output_text = response.text
        if not output_text:
            raise RuntimeError("Gemini returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Nothing to release; the SDK owns its transport."""
        return None
