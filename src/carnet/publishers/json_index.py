"""JSON index pages for client-side listings."""

from __future__ import annotations

from carnet.posts.models import ListingPage
from carnet.publishers.base import IndexPublisher


class JsonPublisher(IndexPublisher):
    """Dumps the listing page model as JSON."""

    extension = ".json"

    def format_index(self, page: ListingPage) -> str:
        return page.model_dump_json(indent=2) + "\n"
