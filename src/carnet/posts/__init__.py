"""Blog posts: models, front matter, discovery, and listings."""

from carnet.posts.dates import format_date, parse_date
from carnet.posts.frontmatter import extract_body, parse_frontmatter, render_frontmatter
from carnet.posts.listing import (
    build_listing,
    group_by_category,
    select_posts,
    to_link,
    translations,
)
from carnet.posts.models import Language, ListingPage, Post, PostLink
from carnet.posts.reader import PostReader, render_permalink
from carnet.posts.slugs import slugify

__all__ = [
    "Language",
    "ListingPage",
    "Post",
    "PostLink",
    "PostReader",
    "build_listing",
    "extract_body",
    "format_date",
    "group_by_category",
    "parse_date",
    "parse_frontmatter",
    "render_frontmatter",
    "render_permalink",
    "select_posts",
    "slugify",
    "to_link",
    "translations",
]
