"""Supabase-backed interest repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from campus_skill.adapters.supabase_errors import backend_errors
from campus_skill.services.interests import InterestRepository


@dataclass
class SupabaseInterestRepository(InterestRepository):
    """Supabase implementation for interest rows."""

    client: Client

    def create_interest(self, service_id: str, user_id: UUID, message: str) -> None:
        """Insert an interest row."""
        with backend_errors():
            self.client.table("interests").insert(
                [
                    {
                        "service_id": service_id,
                        "user_id": str(user_id),
                        "message": message,
                    }
                ]
            ).execute()
