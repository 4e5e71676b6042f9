"""
confluence-rest - Thin client for Confluence's REST API with a search iterator.

Quick Start
-----------
    from confluence_rest import ConfluenceClient, END_OF_RESULTS

    confluence = ConfluenceClient()
    confluence.start_search({
        "cql": 'type = "page" and space = "home"',
        "expand": "metadata.labels",
    })
    while (result := confluence.next_result()) is not END_OF_RESULTS:
        print(result["title"])

Configuration
-------------
Set these environment variables (or use a .env file):

    CONFLUENCE_URL       - Base URL of the Confluence server
    CONFLUENCE_USERNAME  - Login name
    CONFLUENCE_PASSWORD  - Password or API token (falls back to ~/.netrc)

Plain HTTP
----------
    page = confluence.get("/12345", {"expand": "body.storage"})
    confluence.put("/12345", {"title": "New title", ...})

Exceptions
----------
    NoActiveSearchError          - next_result() before start_search()
    RequestError                 - Non-2xx response (see .code)
    UnsupportedContentTypeError  - Response body we can't decode
    DecodeError                  - Malformed JSON
    CredentialsError             - No username/password available
"""

__version__ = "0.2.0"

from confluence_rest.client import ConfluenceClient
from confluence_rest.config import ConfluenceSettings
from confluence_rest.pagination import END_OF_RESULTS, EndOfResults
from confluence_rest.exceptions import (
    ConfluenceError,
    NoActiveSearchError,
    RequestError,
    UnsupportedContentTypeError,
    DecodeError,
    CredentialsError,
)

__all__ = [
    "ConfluenceClient",
    "ConfluenceSettings",
    "END_OF_RESULTS",
    "EndOfResults",
    "ConfluenceError",
    "NoActiveSearchError",
    "RequestError",
    "UnsupportedContentTypeError",
    "DecodeError",
    "CredentialsError",
    "__version__",
]
