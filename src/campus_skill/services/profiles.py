"""Profile cache backed by the profiles table."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from campus_skill.domain.errors import BackendError
from campus_skill.domain.models import AuthUser, Profile

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def list_profiles(self) -> list[Profile]:
        """Return every profile row."""

    def upsert_profile(self, profile: Profile) -> None:
        """Insert or update a profile keyed by id."""


@dataclass
class ProfileCache:
    """Snapshot of all profiles keyed by the string form of the user id."""

    repository: ProfileRepository
    profiles: dict[str, Profile] = field(default_factory=dict)

    def fetch_profiles(self) -> None:
        """Reload every profile, keeping the old snapshot on failure."""
        try:
            rows = self.repository.list_profiles()
        except BackendError as exc:
            _logger.error("Failed to fetch profiles: %s", exc.message)
            return
        self.profiles = {str(profile.id): profile for profile in rows}

    def upsert_profile(self, user: AuthUser) -> None:
        """Ensure a profile exists for the user, then reload the cache."""
        full_name = user.user_metadata.get("full_name") or user.email
        profile = Profile(
            id=user.id,
            full_name=str(full_name) if full_name else None,
            created_at=datetime.now(tz=UTC),
        )
        try:
            self.repository.upsert_profile(profile)
        except BackendError as exc:
            _logger.warning("Profile upsert failed for %s: %s", user.id, exc.message)
        self.fetch_profiles()

    def display_name(self, owner: str | None) -> str:
        """Return the name shown for a service owner."""
        if owner is None:
            return ""
        profile = self.profiles.get(owner)
        if profile is None:
            return owner
        return profile.full_name or str(profile.id)
