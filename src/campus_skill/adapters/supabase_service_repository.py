"""Supabase-backed service repository."""

import logging
from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from campus_skill.adapters.supabase_errors import backend_errors
from campus_skill.domain.models import Service
from campus_skill.services.listings import ServiceRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseServiceRepository(ServiceRepository):
    """Supabase implementation for marketplace services."""

    client: Client

    def list_services(self) -> list[Service]:
        """Return every service ordered newest first, skipping malformed rows."""
        with backend_errors():
            response = (
                self.client.table("services")
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        services = []
        for row in response.data or []:
            try:
                services.append(_parse_service(row))
            except (KeyError, TypeError, ValueError):
                _logger.warning("Skipping malformed service row: %r", row.get("id"))
        return services

    def create_service(self, payload: dict[str, object]) -> None:
        """Insert a service row."""
        with backend_errors():
            self.client.table("services").insert([payload]).execute()


def _parse_service(row: dict[str, object]) -> Service:
    """Parse a service row into a domain model."""
    created_raw = row.get("created_at")
    price_raw = row.get("price")
    owner_raw = row.get("owner")
    return Service(
        id=str(row["id"]),
        owner=str(owner_raw) if owner_raw is not None else None,
        title=row.get("title"),
        description=row.get("description"),
        category=row.get("category"),
        price=float(price_raw) if price_raw is not None else None,
        location=row.get("location"),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
