"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_tracker.domain.meals import Meal, MealDraft
from diet_tracker.services.diary import MealRepository

_MEAL_COLUMNS = "id, name, calories, protein, carbs, fats, image_url, created_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal persistence."""

    client: Client

    def create_meal(
        self, user_id: UUID, draft: MealDraft, created_at: datetime
    ) -> Meal:
        """Insert a meal row and return the stored meal."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": draft.name,
                    "calories": draft.calories,
                    "protein": draft.protein_g,
                    "carbs": draft.carbs_g,
                    "fats": draft.fats_g,
                    "image_url": draft.image_url,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_row(response.data[0], fallback_created_at=created_at)

    def list_meals(self, user_id: UUID, start: datetime, end: datetime) -> list[Meal]:
        """Return meals in the time range, oldest first."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_meal(self, user_id: UUID, meal_id: str) -> None:
        """Delete a meal row owned by the user."""
        self.client.table("meals").delete().eq("id", meal_id).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_row(
    row: dict[str, object], fallback_created_at: datetime | None = None
) -> Meal:
    created_at_raw = row.get("created_at")
    if isinstance(created_at_raw, str) and created_at_raw:
        created_at = datetime.fromisoformat(created_at_raw)
    else:
        created_at = fallback_created_at or datetime.min
    return Meal(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories") or 0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fats_g=float(row.get("fats") or 0.0),
        image_url=row.get("image_url"),
        created_at=created_at,
    )
