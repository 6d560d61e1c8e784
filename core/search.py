"""
Search and pagination state carried in the URL.

The listing's view state (query, page) lives entirely in the query string so
reloads, bookmarks and shared links reproduce it. Typing a new search term
always sends the user back to page 1, and an empty term removes the query
parameter rather than filtering on "".
"""

import logging
from typing import Protocol
from urllib.parse import parse_qsl, urlencode

from pydantic import BaseModel, Field

from core.config import DashboardConfig
from utils.debounce import Debouncer

logger = logging.getLogger(__name__)


class SearchState(BaseModel):
    """Listing view state derived from the query string."""

    query: str = ""
    page: int = Field(1, ge=1)

    @classmethod
    def from_query_string(cls, query_string: str) -> "SearchState":
        """
        Parse query and page. A missing, non-numeric or non-positive page
        reads as page 1.
        """
        params = dict(parse_qsl(query_string, keep_blank_values=True))
        try:
            page = int(params.get("page", "1"))
        except ValueError:
            page = 1
        return cls(query=params.get("query", ""), page=max(page, 1))


def next_search_location(pathname: str, query_string: str, term: str) -> str:
    """
    Compute the location to replace the current one with after a new term.

    Args:
        pathname: Current path (e.g. "/dashboard/invoices")
        query_string: Current query string, without the leading "?"
        term: The search input's latest value

    Returns:
        pathname plus the recomputed query string. Parameters other than
        query and page keep their values and order.
    """
    params = parse_qsl(query_string, keep_blank_values=True)
    updates = {"page": "1"}
    if term:
        updates["query"] = term

    merged: list[tuple[str, str]] = []
    seen: set[str] = set()
    for name, value in params:
        if name == "query" and not term:
            continue
        if name in updates:
            if name in seen:
                continue
            seen.add(name)
            merged.append((name, updates[name]))
        else:
            merged.append((name, value))

    for name, value in updates.items():
        if name not in seen:
            merged.append((name, value))

    return f"{pathname}?{urlencode(merged)}"


class Navigator(Protocol):
    """The browser-side location the synchronizer drives."""

    @property
    def pathname(self) -> str: ...

    @property
    def query_string(self) -> str: ...

    def replace(self, location: str) -> None:
        """Swap the current history entry for location (no new entry)."""

    def redirect(self, path: str) -> None:
        """Unconditionally navigate to path."""


class SearchSynchronizer:
    """
    Maps typed search input onto the navigable location, debounced.

    Keystrokes within the debounce window collapse into one location
    replacement reflecting only the final term.
    """

    def __init__(self, navigator: Navigator, debounce_seconds: float = 0.3):
        self._navigator = navigator
        self._debounced = Debouncer(self._apply, debounce_seconds)

    @classmethod
    def from_config(cls, navigator: Navigator, config: DashboardConfig) -> "SearchSynchronizer":
        return cls(navigator, debounce_seconds=config.search_debounce_ms / 1000)

    def on_query_change(self, term: str) -> None:
        self._debounced(term)

    def _apply(self, term: str) -> None:
        location = next_search_location(
            self._navigator.pathname, self._navigator.query_string, term
        )
        logger.debug(f"Searching... {term!r} -> {location}")
        self._navigator.replace(location)

    def flush(self) -> None:
        """Apply a pending term immediately (e.g. on form submit)."""
        self._debounced.flush()

    def close(self) -> None:
        """Teardown: drop any pending term so it can't fire late."""
        self._debounced.cancel()
