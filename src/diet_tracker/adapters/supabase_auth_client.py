"""Supabase Auth client for access token verification."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from diet_tracker.domain.models import UserRecord
from diet_tracker.services.auth import AuthClient


@dataclass
class SupabaseAuthClient(AuthClient):
    """Resolve Supabase access tokens to users."""

    client: Client

    def get_user(self, access_token: str) -> UserRecord | None:
        """Return the user for the token, or None when Supabase rejects it."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            return None
        if response is None or response.user is None:
            return None
        return UserRecord(id=UUID(response.user.id), email=response.user.email)
