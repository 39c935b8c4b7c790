"""Date parsing and language-aware date labels.

Month names are kept here rather than taken from the process locale, so a
French label renders the same on every build machine.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from carnet.posts.models import Language

FR_MONTHS = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)

EN_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DATE_STYLES = ("long", "short", "iso")

# Calendar date, optionally followed by a time and a UTC offset. Only the
# calendar part is kept: a post dated "2016-05-12 23:30 -0500" stays on the 12th.
_DATE_RE = re.compile(
    r"^(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[ T]\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:\s*(?:Z|[+-]\d{2}:?\d{2}))?)?$"
)

_FILENAME_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})-")


def parse_date(value: str | date) -> date:
    """Parse a front-matter date value.

    Raises:
        ValueError: If the value is not a recognised date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    match = _DATE_RE.match(value.strip())
    if not match:
        raise ValueError(f"Unrecognised date: {value!r}")
    year, month, day = (int(g) for g in match.groups())
    return date(year, month, day)


def date_from_filename(name: str) -> date | None:
    """Return the date of a ``YYYY-MM-DD-slug.md`` filename, if it has one."""
    match = _FILENAME_DATE_RE.match(name)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def format_date(d: date, language: Language | str, style: str = "long") -> str:
    """Render a date label for a listing in the given language.

    ``long`` gives ``12 mai 2016`` / ``May 12, 2016``, ``short`` gives
    ``12/05/2016`` / ``05/12/2016`` and ``iso`` gives ``2016-05-12``.
    """
    language = Language(language)
    if style == "iso":
        return d.isoformat()
    if style == "short":
        if language is Language.FR:
            return d.strftime("%d/%m/%Y")
        return d.strftime("%m/%d/%Y")
    if style != "long":
        raise ValueError(f"Unknown date style: {style!r}")

    if language is Language.FR:
        day = "1er" if d.day == 1 else str(d.day)
        return f"{day} {FR_MONTHS[d.month - 1]} {d.year}"
    return f"{EN_MONTHS[d.month - 1]} {d.day}, {d.year}"
