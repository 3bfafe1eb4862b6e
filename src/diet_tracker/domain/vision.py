"""Models for meal photo analysis results."""

import math

from pydantic import BaseModel, Field, field_validator


class MealAnalysis(BaseModel):
    """Nutrition estimate for a single serving shown in a photo."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=50, le=1000)
    protein: float = Field(ge=0, le=100)
    carbs: float = Field(ge=0, le=200)
    fats: float = Field(ge=0, le=100)

    @field_validator("calories", "protein", "carbs", "fats", mode="before")
    @classmethod
    def _round_to_tenth(cls, value: object) -> object:
        if isinstance(value, str):
            value = float(value)
        if isinstance(value, int | float) and not isinstance(value, bool):
            try:
                number = float(value)
            except OverflowError as exc:
                raise ValueError("value must be a finite number") from exc
            if not math.isfinite(number):
                raise ValueError("value must be a finite number")
            return math.floor(number * 10 + 0.5) / 10
        return value
