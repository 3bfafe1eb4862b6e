"""Daily calorie and macronutrient goal calculation."""

import math

from diet_tracker.domain.profiles import ActivityLevel, Goals, Objective, Profile, Sex

CM_PER_FOOT = 30.48
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

OBJECTIVE_ADJUSTMENTS: dict[Objective, int] = {
    Objective.LOSE: -500,
    Objective.MAINTAIN: 0,
    Objective.GAIN: 500,
}

SEX_OFFSETS: dict[Sex, int] = {
    Sex.MALE: 5,
    Sex.FEMALE: -161,
}

PROTEIN_SHARE = 0.3
CARBS_SHARE = 0.4
FATS_SHARE = 0.3
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def compute_goals(profile: Profile) -> Goals:
    """Compute daily goals from a profile using the Mifflin-St Jeor equation.

    Inputs are not validated here; callers validate ranges first.
    """
    bmr = basal_metabolic_rate(profile)
    expenditure = bmr * ACTIVITY_MULTIPLIERS[profile.activity_level]
    # Macros are split from the whole-kcal target.
    calories = round_half_up(expenditure) + OBJECTIVE_ADJUSTMENTS[profile.objective]
    return Goals(
        bmr=round_half_up(bmr),
        daily_calories=calories,
        protein_g=round_half_up(calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN),
        carbs_g=round_half_up(calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
        fats_g=round_half_up(calories * FATS_SHARE / KCAL_PER_GRAM_FAT),
    )


def basal_metabolic_rate(profile: Profile) -> float:
    """Return the unrounded BMR in kcal/day."""
    bmr = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    return bmr + SEX_OFFSETS[profile.sex]


def feet_inches_to_cm(feet: float, inches: float) -> int:
    """Convert a feet and inches height to whole centimeters."""
    return round_half_up(feet * CM_PER_FOOT + inches * CM_PER_INCH)


def cm_to_feet_inches(height_cm: float) -> tuple[int, int]:
    """Convert centimeters to whole feet and rounded inches, carrying 12 in."""
    total_inches = height_cm / CM_PER_INCH
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = round_half_up(total_inches % INCHES_PER_FOOT)
    if inches == INCHES_PER_FOOT:
        return feet + 1, 0
    return feet, inches


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)
