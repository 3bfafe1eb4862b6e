"""Profile setup and goal persistence."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_tracker.domain.profiles import Goals, Profile, ProfileRecord
from diet_tracker.services.goals import compute_goals

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the stored profile for a user, if present."""

    def save_profile(self, user_id: UUID, profile: Profile, goals: Goals) -> None:
        """Store the profile and goals and mark setup completed."""


class GoalsListener(Protocol):
    """Receiver of recomputed goals."""

    def replace_goals(self, user_id: UUID, goals: Goals) -> None:
        """Replace the in-memory goals for a user."""


@dataclass
class ProfileService:
    """Application service for the one-time profile setup."""

    repository: ProfileRepository
    listener: GoalsListener | None = None

    def complete_setup(self, user_id: UUID, profile: Profile) -> Goals:
        """Compute goals for the profile, persist both and return the goals."""
        goals = compute_goals(profile)
        self.repository.save_profile(user_id, profile, goals)
        if self.listener is not None:
            self.listener.replace_goals(user_id, goals)
        logger.info(
            "Profile setup completed",
            extra={"user_id": str(user_id), "daily_calories": goals.daily_calories},
        )
        return goals

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the user's profile."""
        return self.repository.get_profile(user_id)

    def is_setup_completed(self, user_id: UUID) -> bool:
        """Return True once the user has completed setup."""
        record = self.repository.get_profile(user_id)
        return bool(record and record.setup_completed)
