"""
URL validation helpers.

Every firmware location and server URL passes through validate_url() before
it reaches the domain model.
"""

from urllib.parse import urlsplit

from ipswdownloads.constants import DEFAULT_SERVER_URL
from ipswdownloads.exceptions import InvalidURL


def _has_forbidden_characters(value: str) -> bool:
    return any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value)


def validate_url(raw: str) -> str:
    """
    Return `raw` unchanged if it is a well-formed absolute URL.

    Parsing is delegated to urllib.parse.urlsplit. The string must have a
    scheme and a network location, must not contain whitespace or control
    characters, and must carry a numeric port if it carries one at all. No
    normalization is applied.

    Parameters:
        raw (str): Candidate URL string.

    Returns:
        str: The same string.

    Raises:
        InvalidURL: If `raw` is not a string or is not a valid absolute URL.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidURL(raw)
    if _has_forbidden_characters(raw):
        raise InvalidURL(raw, details="contains whitespace or control characters")

    try:
        parts = urlsplit(raw)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise InvalidURL(raw, details=str(e)) from e

    if not parts.scheme or not parts.netloc or not parts.hostname:
        raise InvalidURL(raw, details="not an absolute URL")
    return raw


def default_server_url() -> str:
    """Validate and return the production server URL."""
    return validate_url(DEFAULT_SERVER_URL)
