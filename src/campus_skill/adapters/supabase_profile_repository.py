"""Supabase-backed profile repository."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from campus_skill.adapters.supabase_errors import backend_errors
from campus_skill.domain.models import Profile
from campus_skill.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def list_profiles(self) -> list[Profile]:
        """Return every profile row, skipping malformed rows."""
        with backend_errors():
            response = self.client.table("profiles").select("*").execute()
        profiles = []
        for row in response.data or []:
            try:
                profiles.append(_parse_profile(row))
            except (KeyError, TypeError, ValueError):
                _logger.warning("Skipping malformed profile row: %r", row.get("id"))
        return profiles

    def upsert_profile(self, profile: Profile) -> None:
        """Insert or update the profile row keyed by id."""
        with backend_errors():
            self.client.table("profiles").upsert(
                {
                    "id": str(profile.id),
                    "full_name": profile.full_name,
                    "created_at": (
                        profile.created_at.isoformat() if profile.created_at else None
                    ),
                }
            ).execute()


def _parse_profile(row: dict[str, object]) -> Profile:
    """Parse a profile row into a domain model."""
    created_raw = row.get("created_at")
    return Profile(
        id=UUID(str(row["id"])),
        full_name=row.get("full_name"),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
