"""Domain models for the diet tracker."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents an authenticated Supabase user."""

    id: UUID
    email: str | None
