"""Tests for the analysis service and image helpers."""

import asyncio
import base64

import pytest

from cravesmart.domain.analysis import AnalysisRequest, ImageInput, PlanType
from cravesmart.domain.profiles import DietType, UserProfile
from cravesmart.errors import AnalysisFailedError, InputValidationError
from cravesmart.services.analysis import (
    AnalysisService,
    build_image_input,
    decode_image,
    to_data_url,
)
from cravesmart.services.sanitizer import REPLACED_MARKER
from tests.conftest import PNG_BYTES, FakeAnalysisClient, sample_meal_payload


def test_analyze_without_image_is_rejected_before_calling_model() -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client)

    with pytest.raises(InputValidationError) as excinfo:
        asyncio.run(
            service.analyze(AnalysisRequest(plan_type=PlanType.ANALYZE), UserProfile())
        )

    assert excinfo.value.message == "Please upload a meal photo to analyze."
    assert client.calls == []


@pytest.mark.parametrize("meals", [1, 6])
def test_meals_per_day_out_of_range_is_rejected(meals) -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client)
    request = AnalysisRequest(plan_type=PlanType.FULL_DAY, meals_per_day=meals)

    with pytest.raises(InputValidationError):
        asyncio.run(service.analyze(request, UserProfile()))

    assert client.calls == []


def test_full_day_plan_without_image_is_allowed() -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client)
    request = AnalysisRequest(plan_type=PlanType.FULL_DAY, meals_per_day=2)

    result = asyncio.run(service.analyze(request, UserProfile()))

    assert len(result.daily_plan) == 2
    assert client.calls[0]["image"] is None
    assert "exactly 2 meals" in client.calls[0]["prompt"]


def test_image_is_forwarded_to_model() -> None:
    client = FakeAnalysisClient(payload=sample_meal_payload())
    service = AnalysisService(client=client)
    image = ImageInput(data=PNG_BYTES, mime_type="image/png")

    result = asyncio.run(
        service.analyze(
            AnalysisRequest(plan_type=PlanType.ANALYZE, image=image), UserProfile()
        )
    )

    assert client.calls[0]["image"] is image
    assert result.detected_meal_name == "Paneer Tikka"
    assert result.daily_plan is None


def test_model_error_becomes_generic_failure() -> None:
    service = AnalysisService(client=FakeAnalysisClient(error=RuntimeError("boom")))

    with pytest.raises(AnalysisFailedError) as excinfo:
        asyncio.run(
            service.analyze(AnalysisRequest(plan_type=PlanType.FULL_DAY), UserProfile())
        )

    assert excinfo.value.message == "Failed to analyze. Please try again."
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_non_object_answer_is_a_failure() -> None:
    service = AnalysisService(client=FakeAnalysisClient(payload=["not", "a", "dict"]))

    with pytest.raises(AnalysisFailedError):
        asyncio.run(
            service.analyze(AnalysisRequest(plan_type=PlanType.FULL_DAY), UserProfile())
        )


def test_plan_is_sanitized_for_diet() -> None:
    service = AnalysisService(client=FakeAnalysisClient())
    profile = UserProfile(diet_type=DietType.VEGETARIAN, country="USA")

    result = asyncio.run(
        service.analyze(AnalysisRequest(plan_type=PlanType.FULL_DAY), profile)
    )

    foods = [
        option.food_items for slot in result.daily_plan for option in slot.options
    ]
    assert not any("chicken" in food.lower() for food in foods)
    assert sum(food.endswith(REPLACED_MARKER) for food in foods) == 2


def test_decode_image_accepts_data_url() -> None:
    encoded = base64.b64encode(PNG_BYTES).decode("ascii")

    image = decode_image(f"data:image/png;base64,{encoded}")

    assert image.data == PNG_BYTES
    assert image.mime_type == "image/png"


def test_decode_image_sniffs_mime_type() -> None:
    jpeg = b"\xff\xd8\xff\xe0rest"

    image = decode_image(base64.b64encode(jpeg).decode("ascii"))

    assert image.mime_type == "image/jpeg"


def test_decode_image_rejects_garbage() -> None:
    with pytest.raises(InputValidationError):
        decode_image("not base64!!")


def test_empty_image_is_rejected() -> None:
    with pytest.raises(InputValidationError):
        build_image_input(b"")


def test_data_url_round_trip_prefix() -> None:
    url = to_data_url(ImageInput(data=b"abc", mime_type="image/webp"))

    assert url == "data:image/webp;base64,YWJj"
