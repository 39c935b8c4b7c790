"""Index publisher factory and registry."""

from __future__ import annotations

from carnet.publishers.base import IndexPublisher
from carnet.publishers.html import HtmlPublisher
from carnet.publishers.json_index import JsonPublisher
from carnet.publishers.markdown import MarkdownPublisher

PUBLISHERS: dict[str, type[IndexPublisher]] = {
    "markdown": MarkdownPublisher,
    "html": HtmlPublisher,
    "json": JsonPublisher,
}


def create_publisher(name: str) -> IndexPublisher:
    """Create a publisher for the given output format.

    Raises:
        ValueError: If the format is unknown.
    """
    try:
        return PUBLISHERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown format: {name!r}") from None


__all__ = [
    "HtmlPublisher",
    "IndexPublisher",
    "JsonPublisher",
    "MarkdownPublisher",
    "PUBLISHERS",
    "create_publisher",
]
