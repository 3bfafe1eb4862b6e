"""Meal diary service backed by per-user in-memory stores."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from diet_tracker.domain.meals import DailyTotals, GoalProgress, Meal, MealDraft
from diet_tracker.domain.profiles import Goals
from diet_tracker.domain.vision import MealAnalysis
from diet_tracker.services.goals import round_half_up
from diet_tracker.services.profiles import ProfileRepository
from diet_tracker.services.progress import compare
from diet_tracker.services.store import MealStore
from diet_tracker.services.vision import ImageAnalyzer

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(
        self, user_id: UUID, draft: MealDraft, created_at: datetime
    ) -> Meal:
        """Persist a meal and return it with its id."""

    def list_meals(self, user_id: UUID, start: datetime, end: datetime) -> list[Meal]:
        """Return meals created within a time range, oldest first."""

    def delete_meal(self, user_id: UUID, meal_id: str) -> None:
        """Delete a meal owned by the user."""


@dataclass
class DiaryService:
    """Service that logs meals and tracks daily progress per user."""

    meal_repository: MealRepository
    profile_repository: ProfileRepository
    analyzer: ImageAnalyzer
    timezone_name: str = "UTC"
    _stores: dict[UUID, tuple[date, MealStore]] = field(
        default_factory=dict, init=False
    )

    def get_store(self, user_id: UUID) -> MealStore:
        """Return today's store for the user, loading it on first use."""
        today, start, end = self._today_bounds()
        cached = self._stores.get(user_id)
        if cached and cached[0] == today:
            return cached[1]
        record = self.profile_repository.get_profile(user_id)
        goals = record.goals if record and record.setup_completed else None
        meals = self.meal_repository.list_meals(user_id, start, end)
        store = MealStore.load(goals, meals)
        self._stores[user_id] = (today, store)
        logger.info(
            "Loaded meal store", extra={"user_id": str(user_id), "meals": len(meals)}
        )
        return store

    def add_meal(self, user_id: UUID, draft: MealDraft) -> Meal:
        """Persist a meal and append it to the user's store."""
        store = self.get_store(user_id)
        meal = self.meal_repository.create_meal(
            user_id, draft, created_at=datetime.now(tz=UTC)
        )
        store.add(meal)
        return meal

    async def add_analyzed_meal(
        self, user_id: UUID, image_data_url: str, image_url: str | None = None
    ) -> Meal:
        """Analyze a meal photo and log the result."""
        analysis = await self.analyzer.analyze(image_data_url)
        logger.info(
            "Analyzed meal photo",
            extra={"user_id": str(user_id), "meal_name": analysis.name},
        )
        return self.add_meal(user_id, draft_from_analysis(analysis, image_url))

    def delete_meal(self, user_id: UUID, meal_id: str) -> bool:
        """Delete a meal; return False when the user has no such meal today."""
        store = self.get_store(user_id)
        if not any(meal.id == meal_id for meal in store.meals):
            return False
        self.meal_repository.delete_meal(user_id, meal_id)
        return store.remove(meal_id)

    def list_meals(self, user_id: UUID) -> list[Meal]:
        """Return today's meals in the order they were logged."""
        return list(self.get_store(user_id).meals)

    def get_goals(self, user_id: UUID) -> Goals:
        """Return the goals currently held for the user."""
        return self.get_store(user_id).goals

    def replace_goals(self, user_id: UUID, goals: Goals) -> None:
        """Swap in new goals if the user's store is already loaded."""
        cached = self._stores.get(user_id)
        if cached:
            cached[1].replace_goals(goals)

    def get_progress(self, user_id: UUID) -> tuple[DailyTotals, GoalProgress]:
        """Return today's totals and their comparison against goals."""
        store = self.get_store(user_id)
        return store.totals, compare(store.totals, store.goals)

    def _today_bounds(self) -> tuple[date, datetime, datetime]:
        tz = ZoneInfo(self.timezone_name)
        now = datetime.now(tz=tz)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        return start.date(), start.astimezone(UTC), end.astimezone(UTC)


def draft_from_analysis(analysis: MealAnalysis, image_url: str | None) -> MealDraft:
    """Convert a photo analysis into meal fields."""
    return MealDraft(
        name=analysis.name,
        calories=round_half_up(analysis.calories),
        protein_g=analysis.protein,
        carbs_g=analysis.carbs,
        fats_g=analysis.fats,
        image_url=image_url,
    )
