"""Daily progress aggregation over logged meals."""

from collections.abc import Iterable

from diet_tracker.domain.meals import DailyTotals, GoalProgress, Meal, NutrientProgress
from diet_tracker.domain.profiles import Goals

EMPTY_TOTALS = DailyTotals(calories=0, protein_g=0, carbs_g=0, fats_g=0)


def aggregate(meals: Iterable[Meal]) -> DailyTotals:
    """Return the sum of calories and macros over the meals."""
    total = EMPTY_TOTALS
    for meal in meals:
        total = DailyTotals(
            calories=total.calories + meal.calories,
            protein_g=total.protein_g + meal.protein_g,
            carbs_g=total.carbs_g + meal.carbs_g,
            fats_g=total.fats_g + meal.fats_g,
        )
    return total


def compare(totals: DailyTotals, goals: Goals) -> GoalProgress:
    """Compare daily totals against goals."""
    return GoalProgress(
        calories=_progress(totals.calories, goals.daily_calories),
        protein=_progress(totals.protein_g, goals.protein_g),
        carbs=_progress(totals.carbs_g, goals.carbs_g),
        fats=_progress(totals.fats_g, goals.fats_g),
    )


def _progress(consumed: float, goal: float) -> NutrientProgress:
    percent = consumed / goal * 100 if goal > 0 else 0.0
    return NutrientProgress(
        consumed=consumed,
        goal=goal,
        remaining=goal - consumed,
        percent=percent,
    )
