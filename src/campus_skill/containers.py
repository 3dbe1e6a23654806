"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import ClientOptions, create_client

from campus_skill.adapters.supabase_auth_gateway import SupabaseAuthGateway
from campus_skill.adapters.supabase_interest_repository import (
    SupabaseInterestRepository,
)
from campus_skill.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from campus_skill.adapters.supabase_service_repository import (
    SupabaseServiceRepository,
)
from campus_skill.config import Settings
from campus_skill.services.interests import InterestService
from campus_skill.services.listings import ListingStore
from campus_skill.services.page import MarketplacePage
from campus_skill.services.profiles import ProfileCache
from campus_skill.services.registry import PageRegistry
from campus_skill.services.sessions import SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    page_registry: PageRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_page(settings: Settings) -> MarketplacePage:
    """Create a page with its own Supabase client and stores."""
    supabase_client = create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=ClientOptions(flow_type="pkce", auto_refresh_token=False),
    )
    profile_cache = ProfileCache(SupabaseProfileRepository(supabase_client))
    session_store = SessionStore(
        auth=SupabaseAuthGateway(supabase_client),
        profile_cache=profile_cache,
        redirect_url=settings.auth_redirect_url,
    )
    listing_store = ListingStore(
        repository=SupabaseServiceRepository(supabase_client),
        profile_cache=profile_cache,
    )
    interest_service = InterestService(
        repository=SupabaseInterestRepository(supabase_client),
        message=settings.interest_message,
    )
    return MarketplacePage(
        session_store=session_store,
        profile_cache=profile_cache,
        listing_store=listing_store,
        interest_service=interest_service,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    page_registry = PageRegistry(
        page_factory=lambda: build_page(resolved_settings),
        max_pages=resolved_settings.max_open_pages,
    )

    async def close_resources() -> None:
        page_registry.close_all()

    return AppContainer(
        settings=resolved_settings,
        page_registry=page_registry,
        close_resources=close_resources,
    )
