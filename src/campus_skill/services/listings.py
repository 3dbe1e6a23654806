"""Listing store for marketplace services."""

import logging
import math
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from campus_skill.domain.errors import BackendError
from campus_skill.domain.models import AuthSession, Notice, Service
from campus_skill.services.forms import ServiceDraft
from campus_skill.services.profiles import ProfileCache

_logger = logging.getLogger(__name__)


class ServiceRepository(Protocol):
    """Persistence interface for services."""

    def list_services(self) -> list[Service]:
        """Return every service, newest first."""

    def create_service(self, payload: dict[str, object]) -> None:
        """Insert a service row."""


def parse_price(raw: str) -> float | None:
    """Coerce a price field to a number, or None when blank or invalid.

    Digit-group underscores such as "1_000" are rejected.
    """
    cleaned = raw.strip()
    if not cleaned or "_" in cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def build_service_payload(owner: UUID, draft: ServiceDraft) -> dict[str, object]:
    """Build the insert payload for a draft."""
    return {
        "owner": str(owner),
        "title": draft.title,
        "description": draft.description,
        "category": draft.category,
        "price": parse_price(draft.price),
        "location": draft.location or "",
    }


@dataclass
class ListingStore:
    """Snapshot of all services plus the post-service action."""

    repository: ServiceRepository
    profile_cache: ProfileCache
    services: list[Service] = field(default_factory=list)
    loading: bool = False

    def fetch_services(self) -> None:
        """Reload all services, keeping the old snapshot on failure."""
        self.loading = True
        try:
            self.services = self.repository.list_services()
        except BackendError as exc:
            _logger.error("Failed to fetch services: %s", exc.message)
        finally:
            self.loading = False

    def fetch_all(self) -> None:
        """Reload profiles, then services."""
        self.profile_cache.fetch_profiles()
        self.fetch_services()

    def create_service(
        self, session: AuthSession | None, draft: ServiceDraft
    ) -> Notice | None:
        """Post the draft as a new service owned by the signed-in user."""
        if session is None or session.user is None:
            return Notice.error("Sign in first")
        payload = build_service_payload(session.user.id, draft)
        try:
            self.repository.create_service(payload)
        except BackendError as exc:
            return Notice.error(f"Error: {exc.message}")
        _logger.info("Service posted by %s", session.user.id)
        draft.reset()
        self.fetch_all()
        return None
