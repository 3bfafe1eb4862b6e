"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.meals import Meal, MealDraft
from diet_tracker.domain.models import UserRecord
from diet_tracker.domain.profiles import Goals, Profile, ProfileRecord
from diet_tracker.services.auth import AuthClient, AuthService
from diet_tracker.services.diary import DiaryService, MealRepository
from diet_tracker.services.profiles import ProfileRepository, ProfileService
from diet_tracker.services.vision import VisionClient, VisionService

ACCESS_TOKEN = "valid-token"


def make_meal(  # noqa: PLR0913
    name: str = "meal",
    calories: int = 0,
    protein_g: float = 0.0,
    carbs_g: float = 0.0,
    fats_g: float = 0.0,
    created_at: datetime | None = None,
) -> Meal:
    return Meal(
        id=str(uuid4()),
        name=name,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fats_g=fats_g,
        image_url=None,
        created_at=created_at or datetime.now(tz=UTC),
    )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    records: dict[UUID, ProfileRecord] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        return self.records.get(user_id)

    def save_profile(self, user_id: UUID, profile: Profile, goals: Goals) -> None:
        self.records[user_id] = ProfileRecord(
            user_id=user_id, profile=profile, goals=goals, setup_completed=True
        )


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, list[Meal]] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)

    def create_meal(
        self, user_id: UUID, draft: MealDraft, created_at: datetime
    ) -> Meal:
        meal = Meal(
            id=str(uuid4()),
            name=draft.name,
            calories=draft.calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fats_g=draft.fats_g,
            image_url=draft.image_url,
            created_at=created_at,
        )
        self.meals.setdefault(user_id, []).append(meal)
        return meal

    def list_meals(self, user_id: UUID, start: datetime, end: datetime) -> list[Meal]:
        return [
            meal
            for meal in self.meals.get(user_id, [])
            if start <= meal.created_at < end
        ]

    def delete_meal(self, user_id: UUID, meal_id: str) -> None:
        self.deleted.append(meal_id)
        self.meals[user_id] = [
            meal for meal in self.meals.get(user_id, []) if meal.id != meal_id
        ]


@dataclass
class FakeAuthClient(AuthClient):
    """Fake auth client mapping tokens to users."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_user(self, access_token: str) -> UserRecord | None:
        return self.users.get(access_token)


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Grilled chicken salad",
            "calories": 350.04,
            "protein": 32.16,
            "carbs": 12.0,
            "fats": 18.5,
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append({"model": model, "image_data_url": image_data_url})
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
        environment="local",
    )


@pytest.fixture
def user() -> UserRecord:
    return UserRecord(id=uuid4(), email="user@example.com")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ACCESS_TOKEN}"}


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def vision_service(
    settings: Settings, vision_client: FakeVisionClient
) -> VisionService:
    return VisionService(
        client=vision_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )


@pytest.fixture
def diary_service(
    meal_repository: InMemoryMealRepository,
    profile_repository: InMemoryProfileRepository,
    vision_service: VisionService,
) -> DiaryService:
    return DiaryService(
        meal_repository=meal_repository,
        profile_repository=profile_repository,
        analyzer=vision_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    user: UserRecord,
    profile_repository: InMemoryProfileRepository,
    diary_service: DiaryService,
    vision_service: VisionService,
) -> AppContainer:
    auth_service = AuthService(FakeAuthClient(users={ACCESS_TOKEN: user}))
    profile_service = ProfileService(
        repository=profile_repository, listener=diary_service
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        profile_service=profile_service,
        diary_service=diary_service,
        vision_service=vision_service,
        close_resources=close_resources,
    )
