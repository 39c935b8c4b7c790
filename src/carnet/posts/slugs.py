"""Slug helpers shared by the reader, the publishers and the ``new`` command."""

from __future__ import annotations

import hashlib
import re
import unicodedata
from collections.abc import Iterable

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Fold accents and reduce text to lowercase ASCII words joined by hyphens.

    >>> slugify("L'injection de dépendances")
    'l-injection-de-dependances'
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG_RE.sub("-", folded.lower()).strip("-")


def category_key(category: str) -> str:
    """Path segment for a category, never empty.

    Names with nothing left after slugging (``日本語``) get a stable
    ``category-<hash>`` key instead.
    """
    slug = slugify(category)
    if slug:
        return slug
    digest = hashlib.sha1(category.encode("utf-8")).hexdigest()[:8]
    return f"category-{digest}"


def category_clashes(categories: Iterable[str]) -> dict[str, list[str]]:
    """Return the keys shared by distinct category names (``C++`` and ``C#``)."""
    by_key: dict[str, set[str]] = {}
    for name in categories:
        by_key.setdefault(category_key(name), set()).add(name)
    return {key: sorted(names) for key, names in sorted(by_key.items()) if len(names) > 1}
