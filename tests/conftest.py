"""Shared pytest fixtures for confluence-rest tests."""

import pytest
import respx

from confluence_rest.client import ConfluenceClient
from confluence_rest.config import ConfluenceSettings

BASE_URL = "https://wiki.example.com/rest/api/content"
SEARCH_URL = f"{BASE_URL}/search"


def make_page(start, records, has_next, limit=25):
    """Build a search response body the way Confluence lays it out."""
    links = {"base": "https://wiki.example.com", "context": ""}
    if has_next:
        links["next"] = f"/rest/api/content/search?start={start + limit}&limit={limit}"
    return {
        "results": records,
        "start": start,
        "limit": limit,
        "size": len(records),
        "_links": links,
    }


def make_records(count, first=0):
    """Return count records with sequential ids."""
    return [{"id": str(i), "title": f"Page {i}"} for i in range(first, first + count)]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep real CONFLUENCE_* variables out of the tests."""
    for name in ("URL", "USERNAME", "PASSWORD", "TIMEOUT", "PROXY", "VERIFY", "USER_AGENT"):
        monkeypatch.delenv(f"CONFLUENCE_{name}", raising=False)


@pytest.fixture
def mock_settings():
    """Return test settings that don't require real credentials."""
    return ConfluenceSettings(
        url="https://wiki.example.com",
        username="alice",
        password="s3cret",
    )


@pytest.fixture
def client(mock_settings):
    """ConfluenceClient with test settings."""
    with ConfluenceClient(mock_settings) as confluence:
        yield confluence


@pytest.fixture
def mock_api():
    """Activate respx for the duration of a test."""
    with respx.mock(assert_all_called=False) as router:
        yield router
