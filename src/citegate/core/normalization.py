"""Text and metadata normalization utilities."""

import calendar
import re
from typing import FrozenSet, Iterable, NamedTuple, Optional, Tuple

from .models import Creator

PARTIAL_DATE_PATTERN = re.compile(r"^([0-9]{4})(?:-([0-9]{2})(?:-([0-9]{2}))?)?$")


class PartialDate(NamedTuple):
    """ISO-8601 partial date: year, year-month or year-month-day."""

    year: int
    month: Optional[int] = None
    day: Optional[int] = None


def normalize_title(title: str) -> str:
    """Normalize a title for comparison."""
    if not title:
        return ""
    title = title.lower()
    title = re.sub(r'[^\w\s]', '', title)
    title = ' '.join(title.split())
    return title


def parse_partial_date(date_str: Optional[str]) -> Optional[PartialDate]:
    """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

    Returns None when the text does not match the pattern or names a
    month or day that does not exist. The year itself is not range checked.
    """
    if not date_str:
        return None
    match = PARTIAL_DATE_PATTERN.match(date_str.strip())
    if not match:
        return None
    year = int(match.group(1))
    month = int(match.group(2)) if match.group(2) else None
    day = int(match.group(3)) if match.group(3) else None
    if month is not None and not 1 <= month <= 12:
        return None
    if day is not None and not 1 <= day <= calendar.monthrange(year, month)[1]:
        return None
    return PartialDate(year, month, day)


def extract_year(date_str: Optional[str]) -> Optional[int]:
    """Year of a well-formed partial date, else None."""
    parsed = parse_partial_date(date_str)
    return parsed.year if parsed else None


def creator_key(creator: Creator) -> Tuple[str, str]:
    """Case- and spacing-insensitive identity of a creator."""
    family = " ".join(creator.family_name.split()).casefold()
    given = " ".join((creator.given_name or "").split()).casefold()
    return family, given


def creator_set(creators: Iterable[Creator]) -> FrozenSet[Tuple[str, str]]:
    """Order-insensitive set of creator identities."""
    return frozenset(creator_key(c) for c in creators)
