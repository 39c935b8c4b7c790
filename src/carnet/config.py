"""Unified configuration loaded from .carnet.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from carnet.posts.dates import DATE_STYLES
from carnet.posts.models import Language

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".carnet.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "carnet" / "config.toml"

DEFAULT_PERMALINK = "/:lang/:category/:year/:month/:day/:slug.html"


class SiteConfig(BaseModel):
    """[site] section."""

    title: str = "Carnet"
    base_url: str = ""
    languages: list[Language] = Field(default_factory=lambda: [Language.FR, Language.EN])
    default_language: Language = Language.FR

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _default_language_is_listed(self) -> SiteConfig:
        if self.default_language not in self.languages:
            raise ValueError(
                f"default_language {self.default_language!r} is not in languages"
            )
        return self


class ContentConfig(BaseModel):
    """[content] section."""

    posts_dir: str = "./_posts"
    permalink: str = DEFAULT_PERMALINK
    default_category: str = "general"
    layout: str = "post"


class ListingConfig(BaseModel):
    """[listing] section."""

    latest_limit: int = Field(default=10, ge=0)
    date_style: str = "long"
    headings: dict[str, str] = Field(
        default_factory=lambda: {"fr": "Derniers articles", "en": "Latest posts"}
    )

    @field_validator("date_style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        if value not in DATE_STYLES:
            raise ValueError(f"date_style must be one of {', '.join(DATE_STYLES)}")
        return value

    def heading_for(self, language: Language | str) -> str:
        return self.headings.get(str(language), "Latest posts")


class OutputConfig(BaseModel):
    """[output] section."""

    directory: str = "./_site/indexes"
    formats: list[str] = Field(default_factory=lambda: ["markdown"])


class CarnetConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def posts_path(self) -> Path:
        return Path(self.content.posts_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.output.directory)


def load_config(path: str | Path | None = None) -> CarnetConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .carnet.toml in CWD
    3. ~/.config/carnet/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged CarnetConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = CarnetConfig.model_validate(data) if data else CarnetConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: CarnetConfig, **cli_kwargs: object) -> CarnetConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "posts_dir": ("content", "posts_dir"),
        "output_directory": ("output", "directory"),
        "formats": ("output", "formats"),
        "base_url": ("site", "base_url"),
        "latest_limit": ("listing", "latest_limit"),
        "date_style": ("listing", "date_style"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return CarnetConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: CarnetConfig) -> CarnetConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "CARNET_POSTS_DIR": ("content", "posts_dir"),
        "CARNET_OUTPUT_DIR": ("output", "directory"),
        "CARNET_BASE_URL": ("site", "base_url"),
        "CARNET_DEFAULT_LANGUAGE": ("site", "default_language"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    limit_raw = os.environ.get("CARNET_LATEST_LIMIT")
    if limit_raw is not None:
        data["listing"]["latest_limit"] = int(limit_raw)

    return CarnetConfig.model_validate(data)
