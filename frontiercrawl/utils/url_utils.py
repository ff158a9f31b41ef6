from typing import Optional
from urllib.parse import urldefrag


def strip_fragment(url: str) -> str:
    """Return `url` without its `#fragment` component."""
    return urldefrag(url)[0]


def canonicalize_url(url: Optional[str]) -> str:
    """Canonical form stored on a request: surrounding whitespace and fragment removed."""
    if url is None:
        raise ValueError("url must not be None")
    return strip_fragment(url.strip())
