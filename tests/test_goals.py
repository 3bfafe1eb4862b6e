"""Tests for goal calculation."""

from dataclasses import replace

import pytest

from diet_tracker.domain.profiles import ActivityLevel, Objective, Profile, Sex
from diet_tracker.services.goals import (
    ACTIVITY_MULTIPLIERS,
    basal_metabolic_rate,
    cm_to_feet_inches,
    compute_goals,
    feet_inches_to_cm,
    round_half_up,
)

PROFILE = Profile(
    age=25,
    weight_kg=70,
    height_cm=170,
    sex=Sex.MALE,
    activity_level=ActivityLevel.MODERATE,
    objective=Objective.MAINTAIN,
)

# Largest possible drift of 4P + 4C + 9F from the calorie target after
# rounding each macro independently.
MACRO_TOLERANCE = 4 * 0.5 + 4 * 0.5 + 9 * 0.5


def test_compute_goals_reference_profile() -> None:
    goals = compute_goals(PROFILE)

    assert basal_metabolic_rate(PROFILE) == 1642.5
    assert goals.bmr == 1643
    assert goals.daily_calories == 2546
    assert goals.protein_g == 191
    assert goals.carbs_g == 255
    assert goals.fats_g == 85


def test_macros_split_from_whole_calorie_target() -> None:
    profile = replace(PROFILE, age=18, weight_kg=49)

    goals = compute_goals(profile)

    # 1467.5 * 1.55 = 2274.625, which rounds to 2275 before the split
    assert goals.daily_calories == 2275
    assert goals.protein_g == 171
    assert goals.carbs_g == 228
    assert goals.fats_g == 76


def test_compute_goals_is_deterministic() -> None:
    assert compute_goals(PROFILE) == compute_goals(replace(PROFILE))


def test_female_bmr_is_166_lower() -> None:
    female = replace(PROFILE, sex=Sex.FEMALE)

    assert basal_metabolic_rate(PROFILE) - basal_metabolic_rate(female) == 166
    assert compute_goals(PROFILE).bmr - compute_goals(female).bmr == 166


@pytest.mark.parametrize(
    ("objective", "offset"),
    [(Objective.LOSE, -500), (Objective.MAINTAIN, 0), (Objective.GAIN, 500)],
)
def test_objective_offsets_calorie_target(objective: Objective, offset: int) -> None:
    goals = compute_goals(replace(PROFILE, objective=objective))

    assert goals.daily_calories == 2546 + offset


@pytest.mark.parametrize("level", list(ActivityLevel))
def test_activity_multiplier_applies_to_unrounded_bmr(level: ActivityLevel) -> None:
    profile = replace(PROFILE, activity_level=level)

    goals = compute_goals(profile)

    assert goals.daily_calories == round_half_up(1642.5 * ACTIVITY_MULTIPLIERS[level])


@pytest.mark.parametrize("level", list(ActivityLevel))
@pytest.mark.parametrize("objective", list(Objective))
@pytest.mark.parametrize("sex", list(Sex))
def test_macro_split_matches_calorie_target(
    level: ActivityLevel, objective: Objective, sex: Sex
) -> None:
    profile = Profile(
        age=41,
        weight_kg=83.4,
        height_cm=181.3,
        sex=sex,
        activity_level=level,
        objective=objective,
    )

    goals = compute_goals(profile)
    macro_calories = 4 * goals.protein_g + 4 * goals.carbs_g + 9 * goals.fats_g

    assert abs(macro_calories - goals.daily_calories) <= MACRO_TOLERANCE


def test_feet_inches_to_cm_rounds_to_whole_cm() -> None:
    assert feet_inches_to_cm(5, 10) == 178
    assert feet_inches_to_cm(6, 0) == 183


def test_cm_to_feet_inches() -> None:
    assert cm_to_feet_inches(178) == (5, 10)
    assert cm_to_feet_inches(170) == (5, 7)


def test_cm_to_feet_inches_carries_rounded_twelve_inches() -> None:
    assert cm_to_feet_inches(182.5) == (6, 0)


def test_round_half_up_rounds_halves_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(1642.5) == 1643
    assert round_half_up(-0.5) == 0
