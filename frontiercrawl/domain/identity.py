import base64
import hashlib

from frontiercrawl.utils.url_utils import canonicalize_url

# Byte length of every content-derived key (url hashes, initiator and profile handles).
COMMON_HASH_LENGTH = 12


def url_hash(url: str) -> bytes:
    """Derive the fixed-length identity key of `url`.

    Depends only on the canonical URL, so a key computed when a request is
    created agrees with one computed later for an equivalent URL.
    """
    canonical = canonicalize_url(url)
    digest = hashlib.md5(canonical.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest)[:COMMON_HASH_LENGTH]


def is_valid_hash(key) -> bool:
    return isinstance(key, (bytes, bytearray)) and len(key) == COMMON_HASH_LENGTH
