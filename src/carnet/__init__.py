"""carnet: listings and content chores for a bilingual Markdown blog."""

__version__ = "0.3.0"
