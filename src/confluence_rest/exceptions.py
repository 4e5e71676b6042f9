"""Exception hierarchy for confluence-rest."""

from typing import Optional


class ConfluenceError(Exception):
    """Base exception for all confluence-rest errors."""
    pass


class NoActiveSearchError(ConfluenceError):
    """
    next_result() was called before start_search().

    This is a programming error; retrying will not help.
    """
    pass


class RequestError(ConfluenceError):
    """
    The server answered with a non-2xx status.

    The code attribute holds the HTTP status. The message is rendered
    from the response body according to its content type. A 401 or 403
    usually means the configured credentials are stale or wrong.
    """

    def __init__(self, message: str, code: int = 500):
        super().__init__(message)
        self.code = code
        self.message = message


class UnsupportedContentTypeError(ConfluenceError):
    """
    A successful response carried a body we don't know how to decode.

    Only application/json and text/plain bodies are understood.
    """

    def __init__(self, message: str, content_type: Optional[str] = None):
        super().__init__(message)
        self.content_type = content_type


class DecodeError(ConfluenceError):
    """A JSON body was malformed, or a search page was not a JSON object."""
    pass


class CredentialsError(ConfluenceError):
    """
    No usable credentials were found.

    Set CONFLUENCE_USERNAME and CONFLUENCE_PASSWORD, or add an entry
    for the server's host to ~/.netrc.
    """
    pass
