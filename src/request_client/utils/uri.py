"""URI helpers"""

from enum import Enum
from typing import Any, Optional
from urllib.parse import ParseResult, SplitResult, urlsplit, urlunsplit

from request_client.exceptions import InvalidArgumentError, InvalidFormatError


def parse_absolute_uri(uri: Any) -> str:
    """
    Validate and normalize an absolute base URI

    Accepts a string, an Enum member whose value is the URI string, or an
    already parsed ``urllib.parse`` result. An authority-only URI gets a
    trailing ``/`` so relative paths can be appended directly.

    Raises:
        InvalidArgumentError: If uri is None, empty or whitespace
        InvalidFormatError: If uri is not an absolute URI
    """
    if isinstance(uri, Enum):
        uri = uri.value

    if isinstance(uri, (ParseResult, SplitResult)):
        uri = uri.geturl()

    if uri is None or (isinstance(uri, str) and uri.strip() == ""):
        raise InvalidArgumentError("uri")

    if not isinstance(uri, str):
        raise InvalidArgumentError("uri", f"uri must be a string, got {type(uri).__name__}")

    text = uri.strip()
    if any(ch.isspace() for ch in text):
        raise InvalidFormatError("Uri format is invalid.", value=uri)

    try:
        parts = urlsplit(text)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise InvalidFormatError("Uri format is invalid.", value=uri) from e

    if not parts.scheme or not parts.netloc:
        raise InvalidFormatError("Uri format is invalid.", value=uri)

    if parts.path == "":
        parts = parts._replace(path="/")

    return urlunsplit(parts)


def compose_url(base_uri: str, path: Optional[str]) -> str:
    """Literal concatenation of base URI and path, no separator inserted"""
    return f"{base_uri}{path or ''}"
