"""Configuration management via environment variables."""

import re
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_PATH = "/rest/api/content"

_API_PATH_RE = re.compile(r"/rest/api/(?:\d+|content)/?$")


class ConfluenceSettings(BaseSettings):
    """
    Confluence REST API configuration.

    All values are read from environment variables prefixed with CONFLUENCE_.
    A .env file in the current directory is loaded automatically.

    Attributes:
        url: Base URL of the Confluence server
        username: Login name (looked up in ~/.netrc when no password is set)
        password: Password or API token (stored securely)
        timeout: Seconds before a request is abandoned
        proxy: Optional proxy URL used for both http and https
        verify: Whether TLS certificates are verified
        user_agent: Value of the User-Agent header

    Example:
        # CONFLUENCE_URL=https://confluence.example.net
        # CONFLUENCE_USERNAME=alice
        # CONFLUENCE_PASSWORD=secret

        settings = ConfluenceSettings()
        print(settings.api_base_url)
    """

    url: str
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    timeout: float = 30.0
    proxy: Optional[str] = None
    verify: bool = True
    user_agent: str = "confluence-rest"

    model_config = SettingsConfigDict(
        env_prefix="CONFLUENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def api_base_url(self) -> str:
        """
        Base URL for API calls.

        /rest/api/content is appended unless the URL already names an
        API version or the content resource.
        """
        url = self.url
        if not _API_PATH_RE.search(url):
            url = url.rstrip("/") + DEFAULT_API_PATH
        return url.rstrip("/")
