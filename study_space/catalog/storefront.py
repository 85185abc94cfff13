"""Validation of the storefront overlay URL."""

import logging
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


def parse_storefront_url(url: str | None) -> str | None:
    """Validate the storefront URL before it is handed to the web view.

    Args:
        url: The configured storefront address.

    Returns:
        The stripped URL if it is an absolute http(s) URL with a host,
        otherwise None, meaning the overlay must not be opened.
    """
    candidate = (url or "").strip()
    if not candidate:
        logger.warning("Storefront URL is not configured")
        return None

    try:
        parts = urlsplit(candidate)
        # Accessing port validates it
        parts.port
    except ValueError:
        logger.warning("Storefront URL is malformed: %r", candidate)
        return None

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.hostname:
        logger.warning("Storefront URL is not an absolute http(s) URL: %r", candidate)
        return None

    return candidate
