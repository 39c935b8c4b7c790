"""Post selection and listing rows for index pages."""

from __future__ import annotations

from collections.abc import Iterable

from carnet.posts.dates import format_date
from carnet.posts.models import Language, Post, PostLink


def select_posts(
    posts: Iterable[Post],
    *,
    language: Language | str | None = None,
    category: str | None = None,
    limit: int | None = None,
    include_drafts: bool = False,
) -> list[Post]:
    """Filter posts, order them newest first and keep at most ``limit``.

    The sort is stable: posts sharing a date keep their input order.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    wanted_language = Language(language) if language is not None else None
    selected = [
        p
        for p in posts
        if (wanted_language is None or p.language == wanted_language)
        and (category is None or p.category == category)
        and (include_drafts or not p.draft)
    ]
    selected.sort(key=lambda p: p.date, reverse=True)
    if limit is not None:
        selected = selected[:limit]
    return selected


def to_link(post: Post, *, base_url: str = "", date_style: str = "long") -> PostLink:
    """Render one post as a listing row in the post's own language."""
    return PostLink(
        title=post.title,
        url=f"{base_url.rstrip('/')}{post.url}",
        date_label=format_date(post.date, post.language, date_style),
        date=post.date,
    )


def build_listing(
    posts: Iterable[Post],
    *,
    language: Language | str,
    category: str | None = None,
    limit: int | None = None,
    include_drafts: bool = False,
    base_url: str = "",
    date_style: str = "long",
) -> list[PostLink]:
    """Select posts for one language and render them as link rows."""
    selected = select_posts(
        posts,
        language=language,
        category=category,
        limit=limit,
        include_drafts=include_drafts,
    )
    return [to_link(p, base_url=base_url, date_style=date_style) for p in selected]


def group_by_category(posts: Iterable[Post]) -> dict[str, list[Post]]:
    """Group posts by category, categories by name and posts newest first."""
    groups: dict[str, list[Post]] = {}
    for post in select_posts(posts, include_drafts=True):
        groups.setdefault(post.category, []).append(post)
    return {name: groups[name] for name in sorted(groups)}


def translations(post: Post, posts: Iterable[Post]) -> list[Post]:
    """Return the other-language versions of a post, linked by ``ref``."""
    if not post.ref:
        return []
    others = [
        p
        for p in posts
        if p.ref == post.ref and p.language != post.language
    ]
    return sorted(others, key=lambda p: p.language.value)
