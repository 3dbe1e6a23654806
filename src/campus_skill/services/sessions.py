"""Session store driven by the auth provider's change events."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from campus_skill.domain.errors import BackendError
from campus_skill.domain.models import AuthSession, Notice
from campus_skill.services.profiles import ProfileCache

_logger = logging.getLogger(__name__)

AuthChangeHandler = Callable[[str, AuthSession | None], None]


class AuthSubscription(Protocol):
    """Handle returned when subscribing to auth changes."""

    def unsubscribe(self) -> None:
        """Stop delivering change events."""


class AuthGateway(Protocol):
    """Interface for the hosted auth provider."""

    def get_session(self) -> AuthSession | None:
        """Return the persisted session, renewing it when expired."""

    def on_auth_state_change(self, handler: AuthChangeHandler) -> AuthSubscription:
        """Register a handler for session changes."""

    def sign_in_with_otp(self, email: str, redirect_to: str) -> None:
        """Email a magic sign-in link."""

    def sign_out(self) -> None:
        """End the current session."""

    def exchange_code_for_session(self, auth_code: str) -> None:
        """Redeem a PKCE auth code from a magic link."""

    def verify_email_token(self, token_hash: str, token_type: str) -> None:
        """Redeem an email token hash from a magic link."""


@dataclass
class SessionStore:
    """Holds the current session and reacts to auth changes."""

    auth: AuthGateway
    profile_cache: ProfileCache
    redirect_url: str
    session: AuthSession | None = None
    _subscription: AuthSubscription | None = None

    @property
    def is_signed_in(self) -> bool:
        """Return True when a user is signed in."""
        return self.session is not None and self.session.user is not None

    def load(self) -> None:
        """Restore the session persisted by the auth client."""
        self.session = self.auth.get_session()

    def refresh(self) -> None:
        """Re-read the session so an expired access token gets renewed."""
        if not self.is_signed_in:
            return
        try:
            self.session = self.auth.get_session()
        except BackendError as exc:
            _logger.warning("Session refresh failed: %s", exc.message)

    def subscribe(self) -> None:
        """Start listening for session changes."""
        if self._subscription is None:
            self._subscription = self.auth.on_auth_state_change(self.handle_change)

    def teardown(self) -> None:
        """Stop listening for session changes."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def handle_change(self, event: str, session: AuthSession | None) -> None:
        """Replace the session and make sure the user has a profile."""
        _logger.info("Auth event %s", event)
        self.session = session
        if session is not None and session.user is not None:
            self.profile_cache.upsert_profile(session.user)

    def sign_in(self, email: str) -> Notice:
        """Request a magic link for the email address."""
        if not email.strip():
            return Notice.error("Enter email")
        try:
            self.auth.sign_in_with_otp(email.strip(), self.redirect_url)
        except BackendError as exc:
            return Notice.error(exc.message)
        return Notice("Check your email for the magic link.")

    def sign_out(self) -> None:
        """Sign out with the provider and forget the local session."""
        try:
            self.auth.sign_out()
        except BackendError as exc:
            _logger.warning("Sign-out request failed: %s", exc.message)
        self.session = None

    def redeem(
        self,
        code: str | None = None,
        token_hash: str | None = None,
        token_type: str | None = None,
    ) -> Notice | None:
        """Complete a magic link that landed on the callback URL."""
        try:
            if code:
                self.auth.exchange_code_for_session(code)
            elif token_hash:
                self.auth.verify_email_token(token_hash, token_type or "email")
            else:
                return Notice.error("Invalid sign-in link")
        except BackendError as exc:
            return Notice.error(exc.message)
        return None
