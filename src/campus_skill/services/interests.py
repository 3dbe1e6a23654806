"""Interest action for marketplace services."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from campus_skill.domain.errors import BackendError
from campus_skill.domain.models import AuthSession, Notice


class InterestRepository(Protocol):
    """Persistence interface for interests."""

    def create_interest(self, service_id: str, user_id: UUID, message: str) -> None:
        """Insert an interest row."""


@dataclass
class InterestService:
    """Records that the signed-in user is interested in a service."""

    repository: InterestRepository
    message: str = "Interested via campus app"

    def mark_interest(self, session: AuthSession | None, service_id: str) -> Notice:
        """Insert an interest for the service and report the outcome."""
        if session is None or session.user is None:
            return Notice.error("Sign in to show interest")
        try:
            self.repository.create_interest(
                service_id=service_id,
                user_id=session.user.id,
                message=self.message,
            )
        except BackendError as exc:
            return Notice.error(f"Error: {exc.message}")
        return Notice("Interest recorded — owner can view it.")
