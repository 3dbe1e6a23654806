"""Per-visitor marketplace page state."""

from dataclasses import dataclass, field

from campus_skill.domain.models import Notice
from campus_skill.services.forms import ServiceDraft, SignInForm
from campus_skill.services.interests import InterestService
from campus_skill.services.listings import ListingStore
from campus_skill.services.profiles import ProfileCache
from campus_skill.services.sessions import SessionStore
from campus_skill.services.view import PageView, compose_view


@dataclass
class MarketplacePage:
    """Owns one visitor's stores and forms and runs their actions."""

    session_store: SessionStore
    profile_cache: ProfileCache
    listing_store: ListingStore
    interest_service: InterestService
    sign_in_form: SignInForm = field(default_factory=SignInForm)
    draft: ServiceDraft = field(default_factory=ServiceDraft)
    search: str = ""
    notice: Notice | None = None

    @property
    def is_signed_in(self) -> bool:
        return self.session_store.is_signed_in

    def open(self) -> None:
        """Restore the session, start listening and load all data."""
        self.session_store.load()
        self.session_store.subscribe()
        self.listing_store.fetch_all()

    def close(self) -> None:
        """Stop listening for auth changes."""
        self.session_store.teardown()

    def set_search(self, search: str) -> None:
        self.search = search

    def refresh_session(self) -> None:
        """Renew an expired access token before talking to the backend."""
        self.session_store.refresh()

    def sign_in(self, email: str) -> None:
        """Request a magic link for the given email."""
        self.sign_in_form.update(email)
        self.notice = self.session_store.sign_in(email)

    def sign_out(self) -> None:
        self.session_store.refresh()
        self.session_store.sign_out()

    def redeem(
        self,
        code: str | None = None,
        token_hash: str | None = None,
        token_type: str | None = None,
    ) -> None:
        """Complete a magic link that landed on the callback URL."""
        self.notice = self.session_store.redeem(code, token_hash, token_type)

    def post_service(self, **values: str) -> None:
        """Update the draft from the form and post it."""
        self.draft.update(**values)
        self.session_store.refresh()
        self.notice = self.listing_store.create_service(
            self.session_store.session, self.draft
        )

    def mark_interest(self, service_id: str) -> None:
        self.session_store.refresh()
        self.notice = self.interest_service.mark_interest(
            self.session_store.session, service_id
        )

    def pop_notice(self) -> Notice | None:
        """Return the pending notice and clear it."""
        notice, self.notice = self.notice, None
        return notice

    def view(self) -> PageView:
        """Compose the view, consuming any pending notice."""
        return compose_view(
            session=self.session_store.session,
            services=self.listing_store.services,
            profile_cache=self.profile_cache,
            search=self.search,
            loading=self.listing_store.loading,
            sign_in_email=self.sign_in_form.email,
            draft=self.draft,
            notice=self.pop_notice(),
        )
