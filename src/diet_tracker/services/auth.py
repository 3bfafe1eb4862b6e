"""Authentication against the hosted auth provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.models import UserRecord

logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Interface for resolving access tokens to users."""

    def get_user(self, access_token: str) -> UserRecord | None:
        """Return the user owning the token, or None if it is invalid."""


@dataclass
class AuthService:
    """Application service for request authentication."""

    client: AuthClient

    def authenticate(self, access_token: str | None) -> UserRecord | None:
        """Return the user for a bearer token, or None when unauthenticated."""
        if not access_token:
            return None
        user = self.client.get_user(access_token)
        if user is None:
            logger.info("Rejected invalid access token")
        return user


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an Authorization header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
