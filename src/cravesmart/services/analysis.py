"""Meal analysis and day planning through a hosted model."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from cravesmart.domain.analysis import (
    MAX_MEALS_PER_DAY,
    MIN_MEALS_PER_DAY,
    AnalysisRequest,
    AnalysisResult,
    ImageInput,
    PlanType,
)
from cravesmart.domain.profiles import UserProfile
from cravesmart.errors import AnalysisFailedError, InputValidationError
from cravesmart.services.prompts import build_analysis_prompt
from cravesmart.services.sanitizer import sanitize_plan

_logger = logging.getLogger(__name__)


class AnalysisClient(Protocol):
    """Interface for a single JSON-producing model call."""

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        image: ImageInput | None,
    ) -> dict[str, object]:
        """Return the model's parsed JSON answer."""


@dataclass
class AnalysisService:
    """Validates requests, calls the model and cleans up its answer."""

    client: AnalysisClient

    async def analyze(
        self, request: AnalysisRequest, profile: UserProfile
    ) -> AnalysisResult:
        """Run one analysis or plan request for a profile."""
        validate_request(request)
        prompt = build_analysis_prompt(
            profile,
            has_image=request.image is not None,
            description=request.description,
            plan_type=request.plan_type,
            meals_per_day=request.meals_per_day,
        )
        try:
            payload = await self.client.generate(
                prompt=prompt.text, schema=prompt.schema, image=request.image
            )
            if not isinstance(payload, dict):
                raise TypeError(
                    f"Expected a JSON object, got {type(payload).__name__}"
                )
            result = AnalysisResult.model_validate(payload)
        except Exception as exc:
            _logger.exception(
                "Meal analysis failed", extra={"plan_type": str(request.plan_type)}
            )
            raise AnalysisFailedError() from exc
        return sanitize_plan(result, profile)


def validate_request(request: AnalysisRequest) -> None:
    """Reject requests that cannot be sent to the model."""
    if request.plan_type is PlanType.ANALYZE and request.image is None:
        raise InputValidationError("Please upload a meal photo to analyze.")
    if not MIN_MEALS_PER_DAY <= request.meals_per_day <= MAX_MEALS_PER_DAY:
        raise InputValidationError(
            f"Meals per day must be between {MIN_MEALS_PER_DAY} "
            f"and {MAX_MEALS_PER_DAY}."
        )


def build_image_input(image_bytes: bytes, mime_type: str | None = None) -> ImageInput:
    """Wrap uploaded bytes, sniffing the MIME type when none is given."""
    if not image_bytes:
        raise InputValidationError("The uploaded image is empty.")
    return ImageInput(
        data=image_bytes, mime_type=mime_type or _detect_mime_type(image_bytes)
    )


def decode_image(encoded: str, mime_type: str | None = None) -> ImageInput:
    """Decode a base64 string or data URL into an image input."""
    payload = encoded.strip()
    if payload.startswith("data:") and "," in payload:
        header, payload = payload.split(",", maxsplit=1)
        declared = header.removeprefix("data:").split(";", maxsplit=1)[0]
        mime_type = mime_type or declared or None
    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except ValueError as exc:
        raise InputValidationError("Could not read the uploaded image.") from exc
    return build_image_input(image_bytes, mime_type)


def to_data_url(image: ImageInput) -> str:
    """Convert an image to a base64 data URL."""
    encoded = base64.b64encode(image.data).decode("utf-8")
    return f"data:{image.mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
