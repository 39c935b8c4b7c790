"""Base class for index-page publishers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from carnet.posts.models import Language, ListingPage
from carnet.posts.slugs import category_key


class IndexPublisher(ABC):
    """Renders a listing page in one output format."""

    extension: str = ""

    @abstractmethod
    def format_index(self, page: ListingPage) -> str:
        """Render the listing page."""

    def index_path(self, output_dir: Path, language: Language | str, category: str | None = None) -> Path:
        """Compute the output file path for a language or category index."""
        base = output_dir / str(language)
        if category is not None:
            base = base / category_key(category)
        return base / f"index{self.extension}"
