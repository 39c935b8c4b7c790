"""Content operations: index builds, content checks, and new posts."""

from __future__ import annotations

import logging
import os
import tempfile
from collections import defaultdict
from datetime import date
from pathlib import Path

from pydantic import BaseModel, Field

from carnet.config import CarnetConfig
from carnet.errors import BuildReport
from carnet.posts.frontmatter import render_frontmatter
from carnet.posts.listing import (
    build_listing,
    group_by_category,
    select_posts,
    to_link,
    translations,
)
from carnet.posts.models import Language, ListingPage, Post
from carnet.posts.reader import PostReader
from carnet.posts.slugs import category_clashes, slugify
from carnet.publishers import create_publisher

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, content: str) -> None:
    """Write a file through a temporary sibling so readers never see half a page."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Index build
# ---------------------------------------------------------------------------


def listing_pages(config: CarnetConfig, posts: list[Post]) -> list[ListingPage]:
    """Compute the language and category index pages for a set of posts.

    Each language gets a "latest posts" page limited to
    ``listing.latest_limit``, plus one unlimited page per category that has
    published posts in that language.
    """
    pages: list[ListingPage] = []
    for language in config.site.languages:
        pages.append(
            ListingPage(
                language=language,
                heading=config.listing.heading_for(language),
                links=build_listing(
                    posts,
                    language=language,
                    limit=config.listing.latest_limit,
                    base_url=config.site.base_url,
                    date_style=config.listing.date_style,
                ),
            )
        )
        groups = group_by_category(select_posts(posts, language=language))
        for category, group in groups.items():
            pages.append(
                ListingPage(
                    language=language,
                    category=category,
                    heading=category,
                    links=[
                        to_link(
                            p,
                            base_url=config.site.base_url,
                            date_style=config.listing.date_style,
                        )
                        for p in group
                    ],
                )
            )
    return pages


def build_indexes(
    config: CarnetConfig,
    *,
    formats: list[str] | None = None,
    posts: list[Post] | None = None,
    report: BuildReport | None = None,
) -> list[Path]:
    """Read the posts and write every index page in every requested format.

    A failure on one page is logged and recorded; the other pages are still
    written. Two category pages that map to the same file (``C++`` and
    ``C#`` both slug to ``c``) are a clash: the first one is kept and the
    others are reported, never silently overwritten.

    Returns:
        List of written index file paths.
    """
    formats = formats or config.output.formats
    publishers = {name: create_publisher(name) for name in formats}
    if posts is None:
        posts = PostReader(config).read_all(report=report)

    output_dir = config.output_path
    written: list[Path] = []
    claimed: dict[Path, ListingPage] = {}
    for page in listing_pages(config, posts):
        for name, publisher in publishers.items():
            out_path = publisher.index_path(output_dir, page.language, page.category)
            owner = claimed.get(out_path)
            if owner is not None:
                logger.warning(
                    "Category %r maps to the same index as %r, skipping %s",
                    page.category,
                    owner.category,
                    out_path,
                )
                if report:
                    report.add_error(
                        "build",
                        f"category {page.category!r} clashes with {owner.category!r}",
                        source=str(out_path),
                        error_type="category_clash",
                    )
                continue
            claimed[out_path] = page
            try:
                _atomic_write(out_path, publisher.format_index(page))
            except OSError as exc:
                logger.warning("Failed to write %s index %s", name, out_path, exc_info=True)
                if report:
                    report.add_error(
                        "build",
                        str(exc),
                        source=str(out_path),
                        error_type="write_error",
                    )
                continue
            written.append(out_path)

    logger.info("Wrote %d index file(s) to %s", len(written), output_dir)
    return written


# ---------------------------------------------------------------------------
# Content check
# ---------------------------------------------------------------------------


class CheckResult(BaseModel):
    """Outcome of a content check."""

    posts_count: int = 0
    report: BuildReport = Field(default_factory=BuildReport)
    duplicate_urls: dict[str, list[str]] = Field(default_factory=dict)
    incomplete_refs: dict[str, list[Language]] = Field(default_factory=dict)
    category_clashes: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return (
            not self.report.has_errors
            and not self.duplicate_urls
            and not self.category_clashes
        )


def check_posts(config: CarnetConfig, posts_dir: Path | None = None) -> CheckResult:
    """Read every content file and report problems an index build would hide.

    Unparsable files, duplicate URLs and distinct categories sharing one
    index path are errors. Translation groups
    (posts sharing a ``ref``) that miss a configured language are reported
    as incomplete but do not fail the check.
    """
    result = CheckResult()
    posts = PostReader(config).read_all(posts_dir, report=result.report)
    result.posts_count = len(posts)

    by_url: dict[str, list[str]] = defaultdict(list)
    by_ref: dict[str, set[Language]] = {}
    for post in posts:
        by_url[post.url].append(str(post.file_path))
        if post.ref and post.ref not in by_ref:
            others = translations(post, posts)
            by_ref[post.ref] = {post.language} | {t.language for t in others}

    result.duplicate_urls = {url: paths for url, paths in sorted(by_url.items()) if len(paths) > 1}
    wanted = set(config.site.languages)
    result.incomplete_refs = {
        ref: sorted(langs, key=lambda lang: lang.value)
        for ref, langs in sorted(by_ref.items())
        if langs != wanted
    }
    result.category_clashes = category_clashes(p.category for p in posts)
    return result


# ---------------------------------------------------------------------------
# New post
# ---------------------------------------------------------------------------


def new_post_path(config: CarnetConfig, title: str, language: Language, day: date) -> Path:
    """Return where a new post file goes: ``<posts_dir>/<lang>/<date>-<slug>.md``."""
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Cannot derive a slug from title {title!r}")
    return config.posts_path / language.value / f"{day.isoformat()}-{slug}.md"


def create_post(
    config: CarnetConfig,
    title: str,
    *,
    language: Language | str,
    category: str,
    day: date | None = None,
    ref: str = "",
    body: str = "",
) -> Path:
    """Scaffold a new content file with its front matter.

    Raises:
        FileExistsError: If a post already exists at the target path.
        ValueError: If the title has no sluggable characters or the language
            is not enabled for the site.
    """
    language = Language(language)
    if language not in config.site.languages:
        raise ValueError(f"Language {language.value!r} is not enabled for this site")
    day = day or date.today()
    path = new_post_path(config, title, language, day)
    if path.exists():
        raise FileExistsError(path)

    fields: dict[str, object] = {
        "layout": config.content.layout,
        "title": title,
        "date": day,
        "category": category,
        "lang": language.value,
    }
    if ref:
        fields["ref"] = ref

    path.parent.mkdir(parents=True, exist_ok=True)
    content = render_frontmatter(fields) + "\n" + (body.strip() + "\n" if body.strip() else "")
    with open(path, "x", encoding="utf-8") as f:
        f.write(content)
    logger.info("Created %s", path)
    return path
