"""Transient form state for the marketplace page."""

from dataclasses import dataclass, fields


@dataclass
class SignInForm:
    """Email field of the magic-link sign-in form."""

    email: str = ""

    def update(self, email: str) -> None:
        """Replace the email field value."""
        self.email = email


@dataclass
class ServiceDraft:
    """Field values of the new-service form."""

    title: str = ""
    description: str = ""
    category: str = ""
    price: str = ""
    location: str = ""

    def update(self, **values: str) -> None:
        """Set one or more draft fields by name."""
        known = {item.name for item in fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        for name, value in values.items():
            setattr(self, name, value)

    def reset(self) -> None:
        """Clear every field."""
        for item in fields(self):
            setattr(self, item.name, "")
