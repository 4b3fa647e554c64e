"""
Slug derivation for article titles.

Pure functions, no IO.
"""

import re
import unicodedata

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[-\s_]+")


def slugify(title: str) -> str:
    """Return a URL-friendly slug for a title.

    Accents are folded to ASCII, punctuation is dropped and runs of
    whitespace, hyphens and underscores collapse to a single hyphen.

    Args:
        title: The article title.

    Returns:
        The slug, or "article" when nothing printable remains.
    """
    normalized = (
        unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_WORD.sub("", normalized.lower())
    slug = _SEPARATORS.sub("-", slug).strip("-")
    return slug or "article"


def candidate_slugs(title: str):
    """Yield the base slug, then base-2, base-3, ... for collision handling."""
    base = slugify(title)
    yield base
    suffix = 2
    while True:
        yield f"{base}-{suffix}"
        suffix += 1
