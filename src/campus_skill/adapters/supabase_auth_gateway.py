"""Supabase-backed auth gateway."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from campus_skill.adapters.supabase_errors import backend_errors
from campus_skill.domain.models import AuthSession, AuthUser
from campus_skill.services.sessions import (
    AuthChangeHandler,
    AuthGateway,
    AuthSubscription,
)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Supabase implementation of the auth provider interface."""

    client: Client

    def get_session(self) -> AuthSession | None:
        """Return the session persisted in the client, if any."""
        with backend_errors():
            session = self.client.auth.get_session()
        return _parse_session(session)

    def on_auth_state_change(self, handler: AuthChangeHandler) -> AuthSubscription:
        """Forward Supabase auth events to the handler as domain sessions."""

        def _callback(event: str, session: object) -> None:
            handler(str(event), _parse_session(session))

        return self.client.auth.on_auth_state_change(_callback)

    def sign_in_with_otp(self, email: str, redirect_to: str) -> None:
        """Email a magic link that redirects back to the site."""
        with backend_errors():
            self.client.auth.sign_in_with_otp(
                {"email": email, "options": {"email_redirect_to": redirect_to}}
            )

    def sign_out(self) -> None:
        """Sign out of the current session."""
        with backend_errors():
            self.client.auth.sign_out()

    def exchange_code_for_session(self, auth_code: str) -> None:
        """Redeem a PKCE code using the verifier stored by this client."""
        with backend_errors():
            self.client.auth.exchange_code_for_session({"auth_code": auth_code})

    def verify_email_token(self, token_hash: str, token_type: str) -> None:
        """Redeem an email token hash."""
        with backend_errors():
            self.client.auth.verify_otp(
                {"token_hash": token_hash, "type": token_type}
            )


def _parse_session(session: object) -> AuthSession | None:
    """Convert a Supabase session into a domain session."""
    if session is None:
        return None
    user = getattr(session, "user", None)
    if user is None:
        return AuthSession(user=None)
    return AuthSession(
        user=AuthUser(
            id=UUID(str(user.id)),
            email=user.email,
            user_metadata=dict(user.user_metadata or {}),
        )
    )
