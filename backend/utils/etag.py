"""ETag hashing for rendered pages."""

import hashlib


def compute_etag(content: str) -> str:
    """
    Compute a deterministic ETag for rendered HTML.

    Rendering is pure, so identical attributes and context headers produce
    identical markup and the same tag.

    Args:
        content: The rendered HTML

    Returns:
        Quoted ETag value (first 16 characters of SHA-256)
    """
    hash_obj = hashlib.sha256(content.encode("utf-8"))
    return f'"{hash_obj.hexdigest()[:16]}"'
