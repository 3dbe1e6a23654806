"""Pure view derivation for the marketplace page."""

from collections.abc import Sequence
from dataclasses import dataclass

from campus_skill.domain.models import AuthSession, Notice, Service
from campus_skill.services.forms import ServiceDraft
from campus_skill.services.profiles import ProfileCache


@dataclass(frozen=True)
class ServiceCard:
    """A service as rendered in the listing."""

    id: str
    title: str
    price_label: str
    description: str
    category: str
    location: str
    owner_name: str


@dataclass(frozen=True)
class PageView:
    """Everything the page template needs to render."""

    cards: list[ServiceCard]
    search: str
    status: str | None
    signed_in_email: str | None
    is_signed_in: bool
    sign_in_email: str
    draft: ServiceDraft
    notice: Notice | None


def filter_services(services: Sequence[Service], search: str) -> list[Service]:
    """Return services whose title, description or category match the term."""
    query = search.strip().lower()
    if not query:
        return list(services)
    return [
        service
        for service in services
        if query in (service.title or "").lower()
        or query in (service.description or "").lower()
        or query in (service.category or "").lower()
    ]


def format_price(price: float | None) -> str:
    """Render a price in rupees, or a dash when absent."""
    if price is None:
        return "₹—"
    if isinstance(price, float) and price.is_integer():
        price = int(price)
    return f"₹{price}"


def build_card(service: Service, profile_cache: ProfileCache) -> ServiceCard:
    return ServiceCard(
        id=service.id,
        title=service.title or "",
        price_label=format_price(service.price),
        description=service.description or "",
        category=service.category or "General",
        location=service.location or "Campus",
        owner_name=profile_cache.display_name(service.owner),
    )


def compose_view(  # noqa: PLR0913
    *,
    session: AuthSession | None,
    services: Sequence[Service],
    profile_cache: ProfileCache,
    search: str,
    loading: bool,
    sign_in_email: str,
    draft: ServiceDraft,
    notice: Notice | None = None,
) -> PageView:
    """Derive the page view from the current stores."""
    filtered = filter_services(services, search)
    status = None
    if loading:
        status = "Loading..."
    elif not filtered:
        status = "No services yet. Post one on the right."
    user = session.user if session is not None else None
    return PageView(
        cards=[build_card(service, profile_cache) for service in filtered],
        search=search,
        status=status,
        signed_in_email=user.email if user is not None else None,
        is_signed_in=user is not None,
        sign_in_email=sign_in_email,
        draft=draft,
        notice=notice,
    )
