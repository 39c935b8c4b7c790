"""Plain markdown index pages."""

from __future__ import annotations

from urllib.parse import quote

from carnet.posts.models import ListingPage
from carnet.publishers.base import IndexPublisher


def _link_target(url: str) -> str:
    return quote(url, safe=":/?#[]@!$&'*+,;=%~")


class MarkdownPublisher(IndexPublisher):
    """Formats a listing as a headed bullet list of links."""

    extension = ".md"

    def format_index(self, page: ListingPage) -> str:
        lines: list[str] = [f"# {page.heading}", ""]
        for link in page.links:
            title = link.title.replace("[", r"\[").replace("]", r"\]")
            lines.append(f"- [{title}]({_link_target(link.url)}) ({link.date_label})")
        if page.links:
            lines.append("")
        return "\n".join(lines)
