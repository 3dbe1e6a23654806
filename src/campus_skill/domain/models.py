"""Domain models for the campus marketplace."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """The signed-in actor as reported by the auth provider."""

    id: UUID
    email: str | None
    user_metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthSession:
    """An authenticated session for a single user."""

    user: AuthUser | None


@dataclass(frozen=True)
class Profile:
    """Public profile row keyed by the auth user id."""

    id: UUID
    full_name: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class Service:
    """A service posted to the marketplace."""

    id: str
    owner: str | None
    title: str | None
    description: str | None
    category: str | None
    price: float | None
    location: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class Notice:
    """A message shown to the visitor after an action."""

    text: str
    kind: str = "info"

    @classmethod
    def error(cls, text: str) -> "Notice":
        """Build an error notice."""
        return cls(text=text, kind="error")
