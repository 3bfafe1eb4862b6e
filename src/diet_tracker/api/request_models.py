"""Pydantic models for API request payloads."""

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from diet_tracker.domain.meals import MealDraft
from diet_tracker.domain.profiles import ActivityLevel, Objective, Profile, Sex
from diet_tracker.services.goals import feet_inches_to_cm
from diet_tracker.services.vision import normalize_image

MIN_HEIGHT_CM = 100
MAX_HEIGHT_CM = 250

_ACTIVITY_ALIASES = {"very": "very-active", "extra": "extra-active"}


class SetupRequest(BaseModel):
    """Profile setup form payload."""

    age: int = Field(ge=1, le=120)
    weight: float = Field(ge=20, le=300)
    height: float | None = Field(default=None, ge=MIN_HEIGHT_CM, le=MAX_HEIGHT_CM)
    height_unit: Literal["cm", "ft"] = "cm"
    height_feet: int | None = Field(default=None, ge=4, le=8)
    height_inches: int | None = Field(default=None, ge=0, le=11)
    gender: Sex
    activity_level: ActivityLevel
    goal: Objective

    @field_validator("activity_level", mode="before")
    @classmethod
    def _expand_activity_alias(cls, value: object) -> object:
        if isinstance(value, str):
            return _ACTIVITY_ALIASES.get(value, value)
        return value

    @model_validator(mode="after")
    def _check_height(self) -> "SetupRequest":
        height_cm = self.height_cm()
        if not MIN_HEIGHT_CM <= height_cm <= MAX_HEIGHT_CM:
            raise ValueError(
                f"height must be between {MIN_HEIGHT_CM} and {MAX_HEIGHT_CM} cm"
            )
        return self

    def height_cm(self) -> float:
        """Return the height resolved to centimeters."""
        if self.height_unit == "ft":
            if self.height_feet is None:
                raise ValueError("height_feet is required when height_unit is ft")
            return float(feet_inches_to_cm(self.height_feet, self.height_inches or 0))
        if self.height is None:
            raise ValueError("height is required when height_unit is cm")
        return self.height

    def to_profile(self) -> Profile:
        """Convert the validated form into a profile."""
        return Profile(
            age=self.age,
            weight_kg=self.weight,
            height_cm=self.height_cm(),
            sex=self.gender,
            activity_level=self.activity_level,
            objective=self.goal,
        )


class MealCreateRequest(BaseModel):
    """Manual meal entry payload."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    image_url: str | None = None

    def to_draft(self) -> MealDraft:
        """Convert the payload into meal fields."""
        return MealDraft(
            name=self.name,
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fats_g=self.fats,
            image_url=self.image_url,
        )


class MealAnalyzeRequest(BaseModel):
    """Meal photo analysis payload."""

    image: str = Field(min_length=1)
    image_url: str | None = None

    @field_validator("image")
    @classmethod
    def _normalize_image(cls, value: str) -> str:
        return normalize_image(value)
