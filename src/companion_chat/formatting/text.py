"""Text truncation, slug and initials helpers."""

import re

ELLIPSIS = "..."

_SLUG_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def truncate(text: str, max_length: int) -> str:
    """Cut *text* to *max_length* characters and append an ellipsis.

    The ellipsis is not counted against *max_length*.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + ELLIPSIS


def slugify(text: str) -> str:
    """Build a URL slug: ``"Hello, World!"`` -> ``"hello-world"``."""
    slug = _SLUG_DISALLOWED.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def get_initials(name: str) -> str:
    """Up to two uppercase initials, one per space-separated word."""
    # Consecutive spaces produce empty words, which contribute nothing.
    return "".join(word[:1] for word in name.split(" ")).upper()[:2]
