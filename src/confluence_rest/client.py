"""ConfluenceClient - main entry point for confluence-rest."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterator, Optional

import httpx
import pandas as pd

from confluence_rest.auth import basic_auth_header, resolve_credentials
from confluence_rest.config import ConfluenceSettings
from confluence_rest.content import decode_body, render_error
from confluence_rest.exceptions import NoActiveSearchError, RequestError
from confluence_rest.pagination import END_OF_RESULTS, SearchSession
from confluence_rest._utils.dataframe import records_to_dataframe

logger = logging.getLogger(__name__)

SEARCH_PATH = "/search"
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


class ConfluenceClient:
    """
    Thin client for the Confluence REST API.

    Reads configuration from environment variables (CONFLUENCE_*) when
    no settings are given. Every request carries a precomputed Basic
    Authorization header and follows redirects.

    Example:
        with ConfluenceClient() as confluence:
            confluence.start_search({"cql": 'type = "page" and space = "home"'})
            while (result := confluence.next_result()) is not END_OF_RESULTS:
                print(result["title"])

    Generator Example:
        for page in confluence.search({"cql": "label = test"}):
            print(page["id"])

    Attributes:
        settings: ConfluenceSettings instance with API configuration
    """

    def __init__(
        self,
        settings: Optional[ConfluenceSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Optional ConfluenceSettings instance. If not provided,
                      settings are loaded from environment variables.
            transport: Optional httpx transport, mainly for testing

        Raises:
            CredentialsError: If no username/password can be resolved
        """
        self.settings = settings or ConfluenceSettings()
        username, password = resolve_credentials(self.settings)
        self._client = httpx.Client(
            base_url=self.settings.api_base_url,
            headers={
                "Authorization": basic_auth_header(username, password),
                "User-Agent": self.settings.user_agent,
            },
            follow_redirects=True,
            timeout=self.settings.timeout,
            proxy=self.settings.proxy,
            verify=self.settings.verify,
            transport=transport,
        )
        self._search: Optional[SearchSession] = None
        self._search_started = False

    def __enter__(self) -> "ConfluenceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    # -------------------------------------------------------------------------
    # Public API: HTTP verbs
    # -------------------------------------------------------------------------

    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """
        GET a resource.

        Args:
            path: Path relative to the API base URL (e.g. "/search")
            query: Optional query parameters

        Returns:
            Decoded body: dict/list for JSON, str for text, None if empty

        Raises:
            RequestError: On a non-2xx response
            UnsupportedContentTypeError: If the body can't be decoded
        """
        return self._request("GET", path, query)

    def delete(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """DELETE a resource. See get() for arguments and errors."""
        return self._request("DELETE", path, query)

    def put(
        self,
        path: str,
        value: Any,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        PUT a JSON-encoded value.

        Args:
            path: Path relative to the API base URL
            value: Body, encoded as JSON (required)
            query: Optional query parameters
            headers: Optional extra headers; Content-Type defaults to JSON

        Raises:
            ValueError: If value is None
            RequestError: On a non-2xx response
        """
        return self._send_json("PUT", path, value, query, headers)

    def post(
        self,
        path: str,
        value: Any,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """POST a JSON-encoded value. See put() for arguments and errors."""
        return self._send_json("POST", path, value, query, headers)

    # -------------------------------------------------------------------------
    # Public API: search iteration
    # -------------------------------------------------------------------------

    def start_search(self, query: Mapping[str, Any]) -> None:
        """
        Set up a search whose results are pulled with next_result().

        Any search already in progress is discarded. No request is made
        until the first next_result() call.

        Args:
            query: Parameters understood by the search endpoint, e.g.
                   {"cql": "label = test and type = page",
                    "expand": "metadata.labels"}

        Raises:
            TypeError: If query is not a mapping
        """
        if not isinstance(query, Mapping):
            raise TypeError("The search query must be a mapping.")
        self._search = SearchSession(query, self._fetch_search_page)
        self._search_started = True

    def next_result(self) -> Any:
        """
        Return the next search result, or END_OF_RESULTS when done.

        Once the results are exhausted every further call returns
        END_OF_RESULTS again until a new search is started.

        Raises:
            NoActiveSearchError: If start_search() has never been called
            RequestError: If fetching a page fails. Calling again retries
                          the same page.
        """
        if self._search is None:
            if not self._search_started:
                raise NoActiveSearchError(
                    "You must call start_search before calling next_result"
                )
            return END_OF_RESULTS

        result = self._search.next_record()
        if self._search.exhausted:
            self._search = None
        return result

    def search(self, query: Mapping[str, Any]) -> Iterator[Any]:
        """
        Start a search and yield every result.

        Args:
            query: Search parameters (see start_search)

        Yields:
            Individual result records
        """
        self.start_search(query)
        while True:
            result = self.next_result()
            if result is END_OF_RESULTS:
                return
            yield result

    def search_dataframe(self, query: Mapping[str, Any], flatten: bool = True) -> pd.DataFrame:
        """
        Run a search and return all results as a DataFrame.

        Args:
            query: Search parameters (see start_search)
            flatten: If True, nested fields become dotted columns

        Returns:
            pandas DataFrame with one row per result
        """
        return records_to_dataframe(self.search(query), flatten=flatten)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _fetch_search_page(self, params: dict[str, Any]) -> Any:
        return self.get(SEARCH_PATH, params)

    def _send_json(
        self,
        method: str,
        path: str,
        value: Any,
        query: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
    ) -> Any:
        if value is None:
            raise ValueError(f"{method} method's 'value' argument is undefined.")

        merged = dict(headers or {})
        if not any(k.lower() == "content-type" for k in merged):
            merged["Content-Type"] = JSON_CONTENT_TYPE

        return self._request(
            method,
            path,
            query,
            json=value,
            headers=merged,
        )

    def _request(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]],
        **kwargs: Any,
    ) -> Any:
        """
        Send one request and decode its response.

        Raises:
            TypeError: If query is not a mapping
            RequestError: On a non-2xx response
        """
        if query is not None and not isinstance(query, Mapping):
            raise TypeError("The QUERY argument must be a mapping.")

        logger.debug("%s %s %s", method, path, dict(query or {}))
        response = self._client.request(method, path, params=query, **kwargs)

        if not response.is_success:
            message = render_error(response)
            logger.warning("%s %s failed with status %d", method, path, response.status_code)
            raise RequestError(message, code=response.status_code)

        return decode_body(response)
