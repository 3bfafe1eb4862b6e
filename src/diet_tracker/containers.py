"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.openai_vision_client import OpenAIVisionClient
from diet_tracker.adapters.supabase_auth_client import SupabaseAuthClient
from diet_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from diet_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_tracker.config import Settings
from diet_tracker.services.auth import AuthService
from diet_tracker.services.diary import DiaryService
from diet_tracker.services.profiles import ProfileService
from diet_tracker.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    profile_service: ProfileService
    diary_service: DiaryService
    vision_service: VisionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    auth_service = AuthService(SupabaseAuthClient(supabase_client))
    openai_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    vision_service = VisionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    diary_service = DiaryService(
        meal_repository=meal_repository,
        profile_repository=profile_repository,
        analyzer=vision_service,
        timezone_name=resolved_settings.diary_timezone,
    )
    profile_service = ProfileService(
        repository=profile_repository,
        listener=diary_service,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        profile_service=profile_service,
        diary_service=diary_service,
        vision_service=vision_service,
        close_resources=close_resources,
    )
