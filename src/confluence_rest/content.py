"""Response body decoding and error rendering, dispatched by content type."""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any, Optional

import httpx
from bs4 import BeautifulSoup

from confluence_rest.exceptions import DecodeError, UnsupportedContentTypeError


class ContentKind(str, Enum):
    """
    Kinds of response body the client distinguishes.

    Attributes:
        PLAIN_TEXT: text/plain, passed through verbatim
        JSON: application/json, decoded into Python values
        HTML: text/html, reduced to its text content in error messages
        OTHER_TEXT: any other textual type, shown wrapped in its type
        BINARY: everything else, never shown
    """
    PLAIN_TEXT = "plain_text"
    JSON = "json"
    HTML = "html"
    OTHER_TEXT = "other_text"
    BINARY = "binary"

    @classmethod
    def classify(cls, content_type: Optional[str]) -> "ContentKind":
        """Map a Content-Type header value to a ContentKind."""
        if not content_type:
            return cls.BINARY
        ctype = content_type.strip().lower()
        if ctype.startswith("text/plain"):
            return cls.PLAIN_TEXT
        if ctype.startswith("application/json"):
            return cls.JSON
        if ctype.startswith("text/html"):
            return cls.HTML
        if re.match(r"^(text/|application|xml)", ctype):
            return cls.OTHER_TEXT
        return cls.BINARY


def decode_body(response: httpx.Response) -> Any:
    """
    Decode the body of a successful response.

    Args:
        response: A 2xx httpx.Response

    Returns:
        None for an empty body, decoded JSON for application/json,
        the text itself for text/plain

    Raises:
        DecodeError: If a JSON body is malformed
        UnsupportedContentTypeError: For any other (or missing) content type
    """
    if not response.content:
        return None

    content_type = response.headers.get("Content-Type")
    if content_type is None:
        raise UnsupportedContentTypeError(
            "Cannot convert response content with no Content-Type specified."
        )

    kind = ContentKind.classify(content_type)
    if kind is ContentKind.JSON:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Malformed JSON in response: {e}") from e
    if kind is ContentKind.PLAIN_TEXT:
        return response.text

    raise UnsupportedContentTypeError(
        f"I don't understand content with Content-Type '{content_type}'.",
        content_type=content_type,
    )


def _render_json(text: str) -> str:
    try:
        error = json.loads(text)
    except json.JSONDecodeError:
        return text
    if not isinstance(error, dict):
        return text

    # Bulk endpoints tuck the errors one level down.
    if isinstance(error.get("elementErrors"), dict):
        error = error["elementErrors"]

    lines = []
    messages = error.get("errorMessages") or []
    if isinstance(messages, str):
        messages = [messages]
    if isinstance(messages, list):
        for message in messages:
            lines.append(f"- {message}")
    errors = error.get("errors") or {}
    if isinstance(errors, dict):
        for key in sorted(errors):
            lines.append(f"- [{key}] {errors[key]}")
    if error.get("message"):
        lines.append(f"- {error['message']}")
    return "\n".join(lines) if lines else text


def render_error(response: httpx.Response) -> str:
    """
    Build a human-readable message for a failed response.

    Args:
        response: A non-2xx httpx.Response

    Returns:
        Message beginning with "Confluence Error[<code> - <reason>]:" and
        ending in exactly one newline
    """
    code = response.status_code
    reason = httpx.codes.get_reason_phrase(code)
    msg = f"Confluence Error[{code}"
    if reason:
        msg += f" - {reason}"
    msg += "]:\n"

    content_type = response.headers.get("Content-Type") or "text/plain"
    kind = ContentKind.classify(content_type)

    if kind is ContentKind.PLAIN_TEXT:
        msg += response.text
    elif kind is ContentKind.JSON:
        msg += _render_json(response.text)
    elif kind is ContentKind.HTML:
        msg += BeautifulSoup(response.text, "html.parser").get_text()
    elif kind is ContentKind.OTHER_TEXT:
        msg += f"<Content-Type: {content_type}>{response.text}</Content-Type>"
    else:
        msg += f"<Content-Type: {content_type}>(binary content not shown)</Content-Type>"

    return msg.rstrip("\n") + "\n"
