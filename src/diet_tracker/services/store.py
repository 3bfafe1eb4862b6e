"""Per-user in-memory meal and goal state."""

from dataclasses import dataclass, field

from diet_tracker.domain.meals import DailyTotals, Meal
from diet_tracker.domain.profiles import Goals
from diet_tracker.services.progress import EMPTY_TOTALS, aggregate

DEFAULT_GOALS = Goals(
    bmr=0,
    daily_calories=2000,
    protein_g=150,
    carbs_g=200,
    fats_g=65,
)


@dataclass
class MealStore:
    """Ordered meal list and goals for one user session.

    Totals are recomputed from the full meal list after every change.
    """

    goals: Goals = DEFAULT_GOALS
    _meals: list[Meal] = field(default_factory=list)
    _totals: DailyTotals = field(default=EMPTY_TOTALS, init=False)

    def __post_init__(self) -> None:
        self._totals = aggregate(self._meals)

    @property
    def meals(self) -> tuple[Meal, ...]:
        """Return meals in insertion order."""
        return tuple(self._meals)

    @property
    def totals(self) -> DailyTotals:
        """Return totals for the current meals."""
        return self._totals

    def add(self, meal: Meal) -> None:
        """Append a meal and refresh totals."""
        self._meals.append(meal)
        self._totals = aggregate(self._meals)

    def remove(self, meal_id: str) -> bool:
        """Remove a meal by id; return True when a meal was removed."""
        remaining = [meal for meal in self._meals if meal.id != meal_id]
        if len(remaining) == len(self._meals):
            return False
        self._meals = remaining
        self._totals = aggregate(self._meals)
        return True

    def replace_goals(self, goals: Goals) -> None:
        """Replace the goals wholesale."""
        self.goals = goals

    @classmethod
    def load(cls, goals: Goals | None, meals: list[Meal]) -> "MealStore":
        """Build a store from persisted goals and meals."""
        return cls(goals=goals or DEFAULT_GOALS, _meals=list(meals))
