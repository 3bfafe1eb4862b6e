"""Domain models for profiles and nutrition goals."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Sex(Enum):
    """Biological sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Weekly exercise frequency."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY_ACTIVE = "very-active"
    EXTRA_ACTIVE = "extra-active"


class Objective(Enum):
    """Weight objective stated by the user."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Profile:
    """Biometric profile with height already resolved to centimeters."""

    age: int
    weight_kg: float
    height_cm: float
    sex: Sex
    activity_level: ActivityLevel
    objective: Objective


@dataclass(frozen=True)
class Goals:
    """Daily calorie and macronutrient targets."""

    bmr: int
    daily_calories: int
    protein_g: int
    carbs_g: int
    fats_g: int


@dataclass(frozen=True)
class ProfileRecord:
    """Persisted profile row for a user."""

    user_id: UUID
    profile: Profile
    goals: Goals
    setup_completed: bool
