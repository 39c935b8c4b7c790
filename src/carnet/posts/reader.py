"""Discovers content files and parses them into posts."""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from carnet.errors import BuildReport, FrontMatterError
from carnet.posts.dates import date_from_filename, parse_date
from carnet.posts.frontmatter import (
    FrontMatter,
    extract_body,
    first_heading,
    has_frontmatter,
    parse_frontmatter,
)
from carnet.posts.models import Language, Post
from carnet.posts.slugs import category_key, slugify

if TYPE_CHECKING:
    from carnet.config import CarnetConfig

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".markdown")

_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-")
_PERMALINK_TOKEN_RE = re.compile(r":(lang|category|year|month|day|slug)\b")
_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")


def _as_str(fm: FrontMatter, key: str) -> str:
    value = fm.get(key, "")
    if isinstance(value, list):
        return value[0] if value else ""
    return value


def _as_list(fm: FrontMatter, key: str) -> list[str]:
    value = fm.get(key, [])
    if isinstance(value, str):
        return value.split()
    return list(value)


def render_permalink(template: str, *, language: str, category: str, day: date, slug: str) -> str:
    """Expand ``:lang``, ``:category``, ``:year``, ``:month``, ``:day`` and ``:slug``."""
    values = {
        "lang": language,
        "category": category_key(category),
        "year": f"{day.year:04d}",
        "month": f"{day.month:02d}",
        "day": f"{day.day:02d}",
        "slug": slug,
    }
    url = _PERMALINK_TOKEN_RE.sub(lambda m: values[m.group(1)], template)
    url = re.sub(r"/{2,}", "/", url)
    if not url.startswith("/"):
        url = "/" + url
    return url


class PostReader:
    """Reads every post under the configured posts directory."""

    def __init__(self, config: CarnetConfig | None = None) -> None:
        if config is None:
            from carnet.config import CarnetConfig

            config = CarnetConfig()
        self.config = config

    def read_all(
        self,
        posts_dir: Path | None = None,
        *,
        report: BuildReport | None = None,
        strict: bool = False,
    ) -> list[Post]:
        """Read all posts, in file path order.

        Files that cannot be parsed are logged, recorded in ``report`` and
        skipped. With ``strict=True`` the first such file raises
        ``FrontMatterError`` instead.
        """
        posts_dir = posts_dir if posts_dir is not None else self.config.posts_path
        if not posts_dir.exists():
            logger.warning("Posts directory does not exist: %s", posts_dir)
            return []

        posts: list[Post] = []
        for path in self.discover(posts_dir):
            try:
                posts.append(self.parse_file(path, posts_dir))
            except FrontMatterError as exc:
                if strict:
                    raise
                logger.warning("Skipping %s: %s", path, exc.message)
                if report:
                    report.add_error(
                        "read",
                        exc.message,
                        source=str(path),
                        error_type="front_matter_error",
                    )

        logger.debug("Read %d post(s) from %s", len(posts), posts_dir)
        return posts

    def discover(self, posts_dir: Path) -> list[Path]:
        """List content files, skipping hidden files and directories."""
        found = [
            p
            for p in posts_dir.rglob("*")
            if p.is_file()
            and p.suffix in CONTENT_SUFFIXES
            and not any(part.startswith((".", "_")) for part in p.relative_to(posts_dir).parts)
        ]
        return sorted(found)

    def parse_file(self, path: Path, posts_dir: Path | None = None) -> Post:
        """Parse a single content file into a Post.

        Raises:
            FrontMatterError: If the file cannot be read or its metadata is
                incomplete or invalid.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FrontMatterError(path, f"could not read file ({exc})") from exc

        if not has_frontmatter(text):
            raise FrontMatterError(path, "missing front matter")
        fm = parse_frontmatter(text)
        body = extract_body(text)

        post_date = self._resolve_date(path, fm)
        language = self._resolve_language(path, fm, posts_dir)
        category = self._resolve_category(path, fm)
        slug = _as_str(fm, "slug") or self._slug_from_path(path)

        title = _as_str(fm, "title") or first_heading(body)
        if not title:
            raise FrontMatterError(path, "missing title")

        url = _as_str(fm, "permalink") or render_permalink(
            self.config.content.permalink,
            language=language.value,
            category=category,
            day=post_date,
            slug=slug,
        )

        return Post(
            title=title,
            date=post_date,
            language=language,
            category=category,
            body=body,
            layout=_as_str(fm, "layout") or self.config.content.layout,
            slug=slug,
            url=url,
            file_path=path,
            tags=_as_list(fm, "tags"),
            ref=_as_str(fm, "ref"),
            draft=self._is_draft(path, fm),
        )

    def _resolve_date(self, path: Path, fm: FrontMatter) -> date:
        raw = _as_str(fm, "date")
        if raw:
            try:
                return parse_date(raw)
            except ValueError as exc:
                raise FrontMatterError(path, f"invalid date {raw!r}") from exc
        from_name = date_from_filename(path.name)
        if from_name is None:
            raise FrontMatterError(path, "no date in front matter or filename")
        return from_name

    def _resolve_language(self, path: Path, fm: FrontMatter, posts_dir: Path | None) -> Language:
        raw = _as_str(fm, "lang") or _as_str(fm, "language")
        if not raw:
            raw = self._language_from_path(path, posts_dir)
        if not raw:
            return self.config.site.default_language

        try:
            language = Language(raw.strip().lower())
        except ValueError as exc:
            raise FrontMatterError(path, f"unknown language {raw!r}") from exc
        if language not in self.config.site.languages:
            raise FrontMatterError(path, f"language {raw!r} is not enabled for this site")
        return language

    def _language_from_path(self, path: Path, posts_dir: Path | None) -> str:
        suffix = Path(path.stem).suffix.lstrip(".")
        if suffix in {lang.value for lang in Language}:
            return suffix
        if posts_dir is not None:
            parts = path.relative_to(posts_dir).parts
            if len(parts) > 1 and parts[0] in {lang.value for lang in Language}:
                return parts[0]
        return ""

    def _resolve_category(self, path: Path, fm: FrontMatter) -> str:
        category = _as_str(fm, "category")
        if category:
            return category
        categories = _as_list(fm, "categories")
        if len(categories) > 1:
            logger.debug("%s has several categories, listing it under %r", path, categories[0])
        if categories:
            return categories[0]
        return self.config.content.default_category

    def _slug_from_path(self, path: Path) -> str:
        stem = path.stem
        lang_suffix = Path(stem).suffix
        if lang_suffix.lstrip(".") in {lang.value for lang in Language}:
            stem = stem[: -len(lang_suffix)]
        return slugify(_DATE_PREFIX_RE.sub("", stem))

    def _is_draft(self, path: Path, fm: FrontMatter) -> bool:
        draft = _as_str(fm, "draft").lower()
        published = _as_str(fm, "published").lower()
        if draft and draft not in _TRUE_VALUES + _FALSE_VALUES:
            logger.warning("%s: unrecognised draft flag %r", path, draft)
        return draft in _TRUE_VALUES or published in _FALSE_VALUES
