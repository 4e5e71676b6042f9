"""Basic authentication for the Confluence REST API."""

import base64
import logging
import netrc
from typing import Optional
from urllib.parse import urlsplit

from confluence_rest.config import ConfluenceSettings
from confluence_rest.exceptions import CredentialsError

logger = logging.getLogger(__name__)


def basic_auth_header(username: str, password: str) -> str:
    """
    Build the value of a Basic Authorization header.

    Confluence never sends an authentication challenge, so the header
    is computed once and attached to every request.

    Args:
        username: Login name
        password: Password or API token

    Returns:
        Header value of the form "Basic <base64(username:password)>"
    """
    token = base64.b64encode(f"{username}:{password}".encode("utf-8"))
    return f"Basic {token.decode('ascii')}"


def resolve_credentials(
    settings: ConfluenceSettings,
    netrc_file: Optional[str] = None,
) -> tuple[str, str]:
    """
    Return the (username, password) pair to authenticate with.

    When no password is configured the server's host is looked up in
    the netrc file. A configured username only selects the netrc entry
    if it matches the entry's login.

    Args:
        settings: ConfluenceSettings with the server URL and credentials
        netrc_file: Path to a netrc file (default: ~/.netrc)

    Returns:
        Tuple of username and password

    Raises:
        CredentialsError: If no usable credentials are found
    """
    if settings.password is not None:
        if not settings.username:
            raise CredentialsError("A username is required when a password is set.")
        return settings.username, settings.password.get_secret_value()

    host = urlsplit(settings.url).hostname or ""
    try:
        entry = netrc.netrc(netrc_file).authenticators(host)
    except (OSError, netrc.NetrcParseError) as e:
        raise CredentialsError(
            f"No password configured and no usable .netrc file: {e}"
        ) from e

    if entry is None:
        raise CredentialsError(f"No credentials for {host!r} found in the .netrc file.")

    login, _, password = entry
    if settings.username and login and settings.username != login:
        logger.debug(
            "Configured username %r differs from .netrc login %r; using .netrc",
            settings.username,
            login,
        )
    username = login or settings.username
    if not username or password is None:
        raise CredentialsError(f"Incomplete .netrc entry for {host!r}.")
    return username, password
