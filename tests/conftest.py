"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from cravesmart.config import Settings
from cravesmart.containers import AppContainer
from cravesmart.domain.analysis import ImageInput
from cravesmart.services.accounts import AccountService, StoredAccountRepository
from cravesmart.services.analysis import AnalysisClient, AnalysisService
from cravesmart.services.cache import InMemoryCache
from cravesmart.services.preferences import ThemeService
from cravesmart.services.sessions import SessionStore
from cravesmart.services.storage import KeyValueStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-png-body"


def sample_plan_payload() -> dict[str, object]:
    """A loosely typed model answer containing a two-slot plan."""
    return {
        "detectedMealName": "Balanced Day Plan",
        "estimatedCalories": "1800 kcal",
        "macros": {"protein": "120g", "carbs": 200, "fats": {"value": "60g"}},
        "healthAnalysis": "A balanced plan for maintenance.",
        "dailyPlan": [
            {
                "mealTime": "Breakfast",
                "options": [
                    {
                        "optionName": "Option 1",
                        "foodItems": "Oats with banana and almonds",
                        "calories": 400,
                        "protein": "15g",
                        "carbs": 60,
                        "fats": 10,
                    },
                    {
                        "optionName": "Option 2",
                        "foodItems": "Grilled chicken sandwich",
                        "calories": "450 kcal",
                        "protein": 30,
                        "carbs": 40,
                        "fats": 12,
                    },
                    {
                        "optionName": "Option 3",
                        "foodItems": "Poha with peanuts",
                        "calories": 350,
                        "protein": 8,
                        "carbs": 55,
                        "fats": 9,
                    },
                ],
            },
            {
                "mealTime": "Dinner",
                "options": [
                    {
                        "optionName": "Option 1",
                        "foodItems": "Dal, rice and salad",
                        "calories": 550,
                        "protein": 20,
                        "carbs": 80,
                        "fats": 12,
                    },
                    {
                        "optionName": "Option 2",
                        "foodItems": "Fish curry with rice",
                        "calories": 600,
                        "protein": 35,
                        "carbs": 70,
                        "fats": 15,
                    },
                ],
            },
        ],
        "coachSummary": "Stay consistent!",
    }


def sample_meal_payload() -> dict[str, object]:
    """A model answer for a single analysed meal."""
    return {
        "detectedMealName": "Paneer Tikka",
        "estimatedCalories": 420,
        "macros": {"protein": 25, "carbs": "12 g", "fats": 28},
        "healthAnalysis": "High in protein.",
        "dailyPlan": None,
        "coachSummary": "Nice choice.",
    }


@dataclass
class InMemoryStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake model client returning a fixed payload and recording calls."""

    payload: object = field(default_factory=sample_plan_payload)
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        image: ImageInput | None,
    ) -> dict[str, object]:
        self.calls.append({"prompt": prompt, "schema": schema, "image": image})
        if self.error is not None:
            raise self.error
        return self.payload  # type: ignore[return-value]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        storage_path=str(tmp_path / "storage.json"),
        environment="test",
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def analysis_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryStore,
    analysis_client: FakeAnalysisClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        account_service=AccountService(StoredAccountRepository(store)),
        theme_service=ThemeService(store),
        session_store=SessionStore(cache=InMemoryCache()),
        analysis_service=AnalysisService(client=analysis_client),
        close_resources=close_resources,
    )
