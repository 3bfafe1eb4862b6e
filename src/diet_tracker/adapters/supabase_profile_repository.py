"""Supabase repository for user profiles and goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_tracker.domain.profiles import (
    ActivityLevel,
    Goals,
    Objective,
    Profile,
    ProfileRecord,
    Sex,
)
from diet_tracker.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "id, age, weight, height, gender, activity_level, goal, bmr, daily_calories, "
    "protein_goal, carbs_goal, fats_goal, setup_completed"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the profile row for a user."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if row.get("age") is None:
            return None
        return _parse_row(row)

    def save_profile(self, user_id: UUID, profile: Profile, goals: Goals) -> None:
        """Upsert the profile with computed goals and mark setup completed."""
        response = (
            self.client.table("profiles")
            .upsert(
                {
                    "id": str(user_id),
                    "age": profile.age,
                    "weight": profile.weight_kg,
                    "height": profile.height_cm,
                    "gender": profile.sex.value,
                    "activity_level": profile.activity_level.value,
                    "goal": profile.objective.value,
                    "bmr": goals.bmr,
                    "daily_calories": goals.daily_calories,
                    "protein_goal": goals.protein_g,
                    "carbs_goal": goals.carbs_g,
                    "fats_goal": goals.fats_g,
                    "setup_completed": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save profile in Supabase")


def _parse_row(row: dict[str, object]) -> ProfileRecord:
    return ProfileRecord(
        user_id=UUID(str(row["id"])),
        profile=Profile(
            age=int(row["age"]),
            weight_kg=float(row["weight"]),
            height_cm=float(row["height"]),
            sex=Sex(row["gender"]),
            activity_level=ActivityLevel(row["activity_level"]),
            objective=Objective(row["goal"]),
        ),
        goals=Goals(
            bmr=int(row.get("bmr") or 0),
            daily_calories=int(row.get("daily_calories") or 0),
            protein_g=int(row.get("protein_goal") or 0),
            carbs_g=int(row.get("carbs_goal") or 0),
            fats_g=int(row.get("fats_goal") or 0),
        ),
        setup_completed=bool(row.get("setup_completed")),
    )
