"""HTML fragment index pages, for inclusion by the site templates."""

from __future__ import annotations

import html

from carnet.posts.models import ListingPage
from carnet.publishers.base import IndexPublisher


class HtmlPublisher(IndexPublisher):
    """Formats a listing as an escaped ``<ul>`` fragment."""

    extension = ".html"

    def format_index(self, page: ListingPage) -> str:
        lang = html.escape(page.language.value)
        lines: list[str] = [
            f'<section class="post-index" lang="{lang}">',
            f"<h2>{html.escape(page.heading)}</h2>",
            '<ul class="post-list">',
        ]
        for link in page.links:
            lines.append(
                f'<li><a href="{html.escape(link.url)}">{html.escape(link.title)}</a> '
                f'<time datetime="{link.date.isoformat()}">{html.escape(link.date_label)}</time></li>'
            )
        lines.append("</ul>")
        lines.append("</section>")
        lines.append("")
        return "\n".join(lines)
