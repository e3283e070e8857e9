"""Custom validators and sanitizers"""

import html
import re
from typing import Optional
import bleach

def normalize_email(email: str) -> str:
    """Lookup form of an email address"""
    return email.strip().lower()

def sanitize_html(html: str, allowed_tags: Optional[list] = None) -> str:
    """Sanitize HTML content"""
    if allowed_tags is None:
        allowed_tags = [
            'a', 'b', 'blockquote', 'em', 'i', 'li', 'ol',
            'strong', 'ul', 'p', 'br'
        ]

    allowed_attributes = {
        'a': ['href', 'title', 'target'],
    }

    return bleach.clean(
        html,
        tags=allowed_tags,
        attributes=allowed_attributes,
        strip=True
    )

def strip_html(text: str) -> str:
    """Remove all markup from plain-text input; entities come back as characters"""
    return html.unescape(bleach.clean(text, tags=[], attributes={}, strip=True))

def normalize_text(text: str) -> str:
    """Normalize text input"""
    # Remove extra whitespace
    text = " ".join(text.split())

    # Remove zero-width characters
    text = re.sub('[\u200b\u200c\u200d\ufeff]', '', text)

    return text.strip()
