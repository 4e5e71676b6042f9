"""Cursor-style iteration over Confluence's start/limit paginated search."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from confluence_rest.exceptions import DecodeError

logger = logging.getLogger(__name__)

PAGE_SIZE = 25


class EndOfResults:
    """Sentinel type returned once a search has no more records."""

    _instance = None

    def __new__(cls) -> "EndOfResults":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "END_OF_RESULTS"


END_OF_RESULTS = EndOfResults()


@dataclass
class Page:
    """
    One server response to a search request.

    Attributes:
        start: Index of the first record within the full result set
        limit: Page size reported by the server
        records: The records in this page, in server order
        has_next: Whether the response carried a "next" link
    """

    start: int = 0
    limit: int = PAGE_SIZE
    records: list[Any] = field(default_factory=list)
    has_next: bool = False

    @classmethod
    def from_json(cls, body: Any, requested_start: int = 0) -> "Page":
        """
        Build a Page from a decoded search response.

        Args:
            body: Decoded JSON body of the search endpoint
            requested_start: start sent in the request, used if the
                             server does not echo one back

        Raises:
            DecodeError: If the body is not a JSON object
        """
        if not isinstance(body, dict):
            raise DecodeError(
                f"Expected a JSON object from the search endpoint, got {type(body).__name__}"
            )
        links = body.get("_links") or {}
        if not isinstance(links, dict):
            raise DecodeError("Search page '_links' is not a JSON object")
        records = body.get("results") or []
        if not isinstance(records, list):
            raise DecodeError("Search page 'results' is not a JSON array")
        try:
            start = int(body.get("start", requested_start))
            limit = int(body.get("limit", PAGE_SIZE))
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Search page has a malformed start or limit: {e}") from e
        return cls(
            start=start,
            limit=limit,
            records=records,
            has_next=bool(links.get("next")),
        )


@dataclass
class PagingState:
    """
    Mutable state of one search session.

    Attributes:
        query: Query parameters, including the start and limit we manage
        offset: Index of the next record to hand out
        call_count: Number of pages fetched so far
        current_page: Most recently fetched page
    """

    query: dict[str, Any]
    offset: int = 0
    call_count: int = 0
    current_page: Page = field(default_factory=Page)


class SearchSession:
    """
    Hands out search results one at a time, fetching pages on demand.

    A new page is requested whenever the offset lands on a page
    boundary. The start parameter, call count and buffered page are
    only updated after a fetch succeeds, so a failed next_record() can
    simply be called again and will repeat the identical request.

    Example:
        session = SearchSession({"cql": "type=page"}, fetch)
        while (record := session.next_record()) is not END_OF_RESULTS:
            print(record["title"])
    """

    def __init__(
        self,
        query: Mapping[str, Any],
        fetch: Callable[[dict[str, Any]], Any],
    ):
        """
        Initialize a session. No request is made until next_record().

        Args:
            query: Search parameters (cql, expand, ...)
            fetch: Callable performing the GET; receives the query
                   parameters and returns the decoded body
        """
        params = dict(query)
        params["start"] = 0
        params["limit"] = PAGE_SIZE
        self.state: PagingState | None = PagingState(query=params)
        self._fetch = fetch

    @property
    def exhausted(self) -> bool:
        """True once the session has run out of records."""
        return self.state is None

    def next_record(self) -> Any:
        """
        Return the next record, or END_OF_RESULTS.

        Raises:
            RequestError, DecodeError, httpx.TransportError: If a page
                fetch fails. The session is left unchanged.
        """
        state = self.state
        if state is None:
            return END_OF_RESULTS

        page = state.current_page
        if (
            state.call_count >= 1
            and not page.has_next
            and state.offset - page.start >= len(page.records)
        ):
            return self._finish()

        if state.offset % PAGE_SIZE == 0:
            self._fetch_page(state)
            page = state.current_page

        index = state.offset - page.start
        if not 0 <= index < len(page.records):
            return self._finish()

        state.offset += 1
        return page.records[index]

    def _fetch_page(self, state: PagingState) -> None:
        start = state.query["start"]
        if state.call_count > 0:
            start += PAGE_SIZE
        params = {**state.query, "start": start}

        logger.debug("Fetching search page start=%d limit=%d", start, PAGE_SIZE)
        page = Page.from_json(self._fetch(params), requested_start=start)

        state.query["start"] = start
        state.current_page = page
        state.call_count += 1

    def _finish(self) -> EndOfResults:
        logger.info(
            "Search exhausted after %d records in %d page(s)",
            self.state.offset,
            self.state.call_count,
        )
        self.state = None
        return END_OF_RESULTS
