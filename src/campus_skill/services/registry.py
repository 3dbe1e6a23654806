"""Registry of open marketplace pages keyed by browser cookie."""

import logging
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

from campus_skill.services.page import MarketplacePage

_logger = logging.getLogger(__name__)


@dataclass
class PageRegistry:
    """Opens one page per visitor and closes idle signed-out pages."""

    page_factory: Callable[[], MarketplacePage]
    max_pages: int = 500
    pages: OrderedDict[str, MarketplacePage] = field(default_factory=OrderedDict)

    def find(self, page_id: str | None) -> MarketplacePage | None:
        """Return the open page for the id, without opening a new one."""
        if not page_id or page_id not in self.pages:
            return None
        self.pages.move_to_end(page_id)
        return self.pages[page_id]

    def get(self, page_id: str | None) -> tuple[str, MarketplacePage, bool]:
        """Return the page for the id, opening a new one when unknown.

        The third element is True when a new page was opened.
        """
        page = self.find(page_id)
        if page is not None and page_id is not None:
            return page_id, page, False
        new_id = uuid4().hex
        page = self.page_factory()
        page.open()
        self.pages[new_id] = page
        self._evict(keep=new_id)
        _logger.info("Opened page %s (%s open)", new_id, len(self.pages))
        return new_id, page, True

    def _evict(self, keep: str) -> None:
        """Close least recently used signed-out pages above the cap.

        Signed-in pages and the page named by ``keep`` are never evicted,
        so the registry may grow past ``max_pages``.
        """
        excess = len(self.pages) - self.max_pages
        if excess <= 0:
            return
        idle = [
            page_id
            for page_id, page in self.pages.items()
            if page_id != keep and not page.is_signed_in
        ][:excess]
        for page_id in idle:
            self.pages.pop(page_id).close()
        if len(idle) < excess:
            _logger.warning(
                "Page cap exceeded: %s open, no idle pages left to close",
                len(self.pages),
            )

    def close_all(self) -> None:
        """Close every open page."""
        for page in self.pages.values():
            page.close()
        self.pages.clear()
