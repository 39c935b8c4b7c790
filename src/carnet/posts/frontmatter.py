"""Front-matter codec for Markdown content files.

A small key-value reader for the subset of YAML that post headers use:
scalars, quoted strings, block lists and inline lists. Nested mappings are
not part of a post header and are not supported.
"""

from __future__ import annotations

import re
from datetime import date

FrontMatter = dict[str, str | list[str]]

_DELIMITERS = ("---", "...")
_NEEDS_QUOTES_RE = re.compile(r"(^[\s\-?:,\[\]{}#&*!|>'\"%@`])|(:\s)|(\s#)|(\s$)|(:$)")
_NUMBER_RE = re.compile(r"^[-+]?(\d[\d_]*)?\.?\d+([eE][-+]?\d+)?$")
_YAML_KEYWORDS = frozenset({"true", "false", "yes", "no", "on", "off", "null", "~"})


def _split(text: str) -> tuple[str, str] | None:
    """Split text into (header, body), or None if there is no complete header."""
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != "---":
        return None
    for i in range(1, len(lines)):
        if lines[i].strip() in _DELIMITERS:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])
    return None


def _closing_quote(value: str) -> int:
    """Index of the quote closing ``value[0]``, or -1 when it is never closed."""
    quote = value[0]
    i = 1
    while i < len(value):
        char = value[i]
        if quote == '"' and char == "\\":
            i += 2
            continue
        if char == quote:
            if quote == "'" and value[i + 1 : i + 2] == "'":
                i += 2
                continue
            return i
        i += 1
    return -1


def _unquote(value: str) -> str:
    value = value.strip()
    if value[:1] in ('"', "'"):
        end = _closing_quote(value)
        rest = value[end + 1 :].strip() if end != -1 else None
        if rest is not None and (not rest or rest.startswith("#")):
            inner = value[1:end]
            if value[0] == '"':
                return inner.replace('\\"', '"').replace("\\\\", "\\")
            return inner.replace("''", "'")
    # Unquoted scalars may carry a trailing comment
    comment = value.find(" #")
    if comment != -1:
        value = value[:comment].rstrip()
    return value


def _inline_list(value: str) -> list[str]:
    inner = value.strip()[1:-1]
    items: list[str] = []
    current: list[str] = []
    quote = ""
    escaped = False
    for char in inner:
        if escaped:
            escaped = False
        elif quote == '"' and char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = ""
        elif char in ('"', "'"):
            quote = char
        elif char == ",":
            items.append("".join(current))
            current = []
            continue
        current.append(char)
    items.append("".join(current))
    return [_unquote(item) for item in items if item.strip()]


def parse_frontmatter(text: str) -> FrontMatter:
    """Extract the front-matter header of a content file.

    Returns an empty dict when the text has no header or the header is
    never closed.
    """
    parts = _split(text)
    if parts is None:
        return {}

    result: FrontMatter = {}
    current_key: str | None = None
    current_list: list[str] = []

    def flush() -> None:
        if current_key is not None:
            result[current_key] = list(current_list) if current_list else ""

    for line in parts[0].splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        # List item under a pending key
        if current_key is not None and (stripped.startswith("- ") or stripped == "-"):
            current_list.append(_unquote(stripped[1:]))
            continue

        flush()
        current_key = None
        current_list = []

        if ":" not in stripped:
            continue
        key, _, value = stripped.partition(":")
        key = key.strip()
        value = value.strip()
        if not value:
            # List header, or an empty scalar if no items follow
            current_key = key
        elif value.startswith("[") and value.endswith("]"):
            result[key] = _inline_list(value)
        else:
            result[key] = _unquote(value)

    flush()
    return result


def has_frontmatter(text: str) -> bool:
    """Return True when the text opens with a complete front-matter header."""
    return _split(text) is not None


def extract_body(text: str) -> str:
    """Return the content after the front-matter header, stripped."""
    parts = _split(text)
    body = parts[1] if parts is not None else text.lstrip("\ufeff")
    return body.strip()


def first_heading(body: str) -> str:
    """Return the first level-one Markdown heading, or an empty string."""
    in_fence = False
    for line in body.splitlines():
        if line.lstrip().startswith("```"):
            in_fence = not in_fence
            continue
        if not in_fence and line.startswith("# "):
            return line[2:].strip()
    return ""


def _looks_typed(text: str) -> bool:
    """True for plain scalars a YAML reader would not load as a string."""
    return text.lower() in _YAML_KEYWORDS or _NUMBER_RE.match(text) is not None


def _scalar(value: str | bool | int | date) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    if not text or _NEEDS_QUOTES_RE.search(text) or _looks_typed(text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def render_frontmatter(fields: dict[str, object]) -> str:
    """Write a front-matter header, ending with the closing delimiter line."""
    lines: list[str] = ["---"]
    for key, value in fields.items():
        if isinstance(value, (list, tuple)):
            if not value:
                lines.append(f"{key}: []")
                continue
            lines.append(f"{key}:")
            for item in value:
                lines.append(f"  - {_scalar(item)}")
        else:
            lines.append(f"{key}: {_scalar(value)}")  # type: ignore[arg-type]
    lines.append("---")
    lines.append("")
    return "\n".join(lines)
