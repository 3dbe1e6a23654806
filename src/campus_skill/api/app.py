"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import urlencode

from fastapi import FastAPI, Form, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from campus_skill.app_logging import configure_logging
from campus_skill.containers import AppContainer
from campus_skill.domain.models import Notice
from campus_skill.services.page import MarketplacePage

_TEMPLATES = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    cookie_name = container.settings.page_cookie_name

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        logger.info("Closing open pages")
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def open_page(request: Request) -> tuple[str, MarketplacePage, bool]:
        state_container: AppContainer = request.app.state.container
        return state_container.page_registry.get(request.cookies.get(cookie_name))

    def existing_page(request: Request) -> MarketplacePage | None:
        state_container: AppContainer = request.app.state.container
        return state_container.page_registry.find(request.cookies.get(cookie_name))

    def remember(response: Response, page_id: str, is_new: bool) -> None:
        if is_new:
            response.set_cookie(cookie_name, page_id, httponly=True, samesite="lax")

    def back_to_page(page: MarketplacePage | None) -> RedirectResponse:
        if page is None or not page.search:
            return RedirectResponse("/", status_code=303)
        return RedirectResponse(f"/?{urlencode({'q': page.search})}", status_code=303)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def marketplace(request: Request, q: str = "") -> HTMLResponse:
        """Render the marketplace page for this visitor."""
        page_id, page, is_new = open_page(request)
        page.refresh_session()
        page.set_search(q)
        view = page.view()
        response = HTMLResponse(_TEMPLATES.get_template("index.html").render(view=view))
        remember(response, page_id, is_new)
        return response

    @app.post("/sign-in")
    async def sign_in(request: Request, email: str = Form("")) -> RedirectResponse:
        """Send a magic sign-in link."""
        page = existing_page(request)
        if page is not None:
            page.sign_in(email)
        return back_to_page(page)

    @app.post("/sign-out")
    async def sign_out(request: Request) -> RedirectResponse:
        """Sign the visitor out."""
        page = existing_page(request)
        if page is not None:
            page.sign_out()
        return back_to_page(page)

    @app.post("/services")
    async def post_service(  # noqa: PLR0913
        request: Request,
        title: str = Form(""),
        description: str = Form(""),
        category: str = Form(""),
        price: str = Form(""),
        location: str = Form(""),
    ) -> RedirectResponse:
        """Post the new-service form."""
        page = existing_page(request)
        if page is not None:
            page.post_service(
                title=title,
                description=description,
                category=category,
                price=price,
                location=location,
            )
        return back_to_page(page)

    @app.post("/services/{service_id}/interest")
    async def mark_interest(service_id: str, request: Request) -> RedirectResponse:
        """Record interest in a service."""
        page = existing_page(request)
        if page is not None:
            page.mark_interest(service_id)
        return back_to_page(page)

    @app.get("/auth/callback")
    async def auth_callback(  # noqa: PLR0913
        request: Request,
        code: str | None = None,
        token_hash: str | None = None,
        type: str | None = None,  # noqa: A002
        error_description: str | None = None,
    ) -> RedirectResponse:
        """Complete a magic link and return to the marketplace."""
        page_id, page, is_new = open_page(request)
        if error_description:
            logger.warning("Magic link rejected: %s", error_description)
            page.notice = Notice.error(error_description)
        else:
            page.redeem(code=code, token_hash=token_hash, token_type=type)
        response = back_to_page(page)
        remember(response, page_id, is_new)
        return response

    return app
