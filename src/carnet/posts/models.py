"""Pure data models for blog posts and listings.

No I/O here. The reader builds ``Post`` objects from content files and the
listing functions turn them into ``PostLink`` rows.
"""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class Language(StrEnum):
    """Languages a post can be written in."""

    FR = "fr"
    EN = "en"


class Post(BaseModel):
    """One article, parsed from a Markdown file with front matter."""

    title: str
    date: date
    language: Language
    category: str
    body: str = ""
    layout: str = "post"
    slug: str
    url: str
    file_path: Path = Path(".")
    tags: list[str] = Field(default_factory=list)
    ref: str = ""  # shared by the fr/en versions of one article
    draft: bool = False


class PostLink(BaseModel):
    """A rendered listing row."""

    title: str
    url: str
    date_label: str
    date: date

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.title, self.url, self.date_label)


class ListingPage(BaseModel):
    """Everything a publisher needs to render one index page."""

    language: Language
    category: str | None = None
    heading: str
    links: list[PostLink] = Field(default_factory=list)
