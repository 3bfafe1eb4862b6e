"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MealDraft:
    """Meal fields before the meal is stored."""

    name: str
    calories: int
    protein_g: float
    carbs_g: float
    fats_g: float
    image_url: str | None = None


@dataclass(frozen=True)
class Meal:
    """A logged meal."""

    id: str
    name: str
    calories: int
    protein_g: float
    carbs_g: float
    fats_g: float
    image_url: str | None
    created_at: datetime


@dataclass(frozen=True)
class DailyTotals:
    """Sum of calories and macros over the logged meals."""

    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class NutrientProgress:
    """Consumption of a single nutrient against its goal."""

    consumed: float
    goal: float
    remaining: float
    percent: float


@dataclass(frozen=True)
class GoalProgress:
    """Daily totals compared against goals."""

    calories: NutrientProgress
    protein: NutrientProgress
    carbs: NutrientProgress
    fats: NutrientProgress
