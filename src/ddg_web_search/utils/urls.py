"""URL helpers."""

from urllib.parse import urlsplit


def is_valid_url(url: str) -> bool:
    """Check that a string parses as an absolute URL.

    Leading and trailing whitespace is ignored. The URL needs a scheme and
    a network location, and may not contain inner whitespace.

    Args:
        url: Candidate URL

    Returns:
        bool: True if the URL is well formed
    """
    candidate = url.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False

    try:
        parts = urlsplit(candidate)
        # Accessing the port validates it
        parts.port
    except ValueError:
        return False

    return bool(parts.scheme) and parts.scheme.isascii() and bool(parts.netloc)
