"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from cravesmart.adapters.gemini_analysis_client import GeminiAnalysisClient
from cravesmart.adapters.json_file_store import JsonFileStore
from cravesmart.adapters.openai_analysis_client import OpenAIAnalysisClient
from cravesmart.adapters.supabase_store import SupabaseStore
from cravesmart.config import Settings
from cravesmart.services.accounts import AccountService, StoredAccountRepository
from cravesmart.services.analysis import AnalysisService
from cravesmart.services.cache import InMemoryCache
from cravesmart.services.preferences import ThemeService
from cravesmart.services.sessions import SessionStore
from cravesmart.services.storage import KeyValueStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    account_service: AccountService
    theme_service: ThemeService
    session_store: SessionStore
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = _build_store(resolved_settings)
    analysis_client = _build_analysis_client(resolved_settings)

    async def close_resources() -> None:
        await analysis_client.close()

    return AppContainer(
        settings=resolved_settings,
        account_service=AccountService(StoredAccountRepository(store)),
        theme_service=ThemeService(store),
        session_store=SessionStore(
            cache=InMemoryCache(),
            ttl_seconds=resolved_settings.session_ttl_seconds,
        ),
        analysis_service=AnalysisService(client=analysis_client),
        close_resources=close_resources,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise RuntimeError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStore(client, table=settings.supabase_table)
    return JsonFileStore(Path(settings.storage_path))


def _build_analysis_client(
    settings: Settings,
) -> OpenAIAnalysisClient | GeminiAnalysisClient:
    if settings.ai_provider == "gemini":
        if not settings.gemini_api_key:
            raise RuntimeError("GEMINI_API_KEY not set in environment")
        return GeminiAnalysisClient.create(
            api_key=settings.gemini_api_key, model=settings.gemini_model
        )
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY not set in environment")
    return OpenAIAnalysisClient.create(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
