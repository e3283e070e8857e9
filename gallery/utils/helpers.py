"""
Helper utilities
"""

import secrets
import string
from datetime import datetime, timezone

import slugify as python_slugify

def generate_slug(text: str) -> str:
    """
    Generate URL-friendly slug from text

    Args:
        text: Input text

    Returns:
        Slug (may be empty if text has no sluggable characters)
    """
    return python_slugify.slugify(text or "", max_length=240, word_boundary=True)

def generate_order_number() -> str:
    """Generate human-readable order number, e.g. ART-20260101-7KQ2ZD"""
    date_part = datetime.now(timezone.utc).strftime("%Y%m%d")
    suffix = "".join(secrets.choice(string.ascii_uppercase + string.digits) for _ in range(6))
    return f"ART-{date_part}-{suffix}"

def generate_reference(prefix: str, key: object, length: int = 8) -> str:
    """Generate an opaque external reference keyed to a local id"""
    return f"{prefix}-{key}-{secrets.token_hex(length // 2).upper()}"
