"""
Calendar month helpers.

Every dashboard query is scoped to a calendar month regardless of year, so the
month is resolved once from the request and compared against the month part of
``date_of_sale``.
"""

import calendar
from datetime import datetime

from sqlalchemy import extract

MONTH_NAMES = {name.lower(): index for index, name in enumerate(calendar.month_name) if name}
MONTH_ABBREVIATIONS = {name.lower(): index for index, name in enumerate(calendar.month_abbr) if name}


class InvalidMonthError(ValueError):
    """Raised when a month value cannot be resolved to 1-12."""


def resolve_month(value) -> int:
    """
    Resolve a month name, abbreviation or number to a month index.

    Accepts "March", "mar", "MARCH" and "3" alike. Anything else raises
    InvalidMonthError.
    """
    if value is None:
        raise InvalidMonthError("month is required")
    text = str(value).strip().lower()
    if text in MONTH_NAMES:
        return MONTH_NAMES[text]
    if text in MONTH_ABBREVIATIONS:
        return MONTH_ABBREVIATIONS[text]
    if text.isdigit() and 1 <= int(text) <= 12:
        return int(text)
    raise InvalidMonthError(f"unknown month: {value!r}")


def month_of(value: datetime) -> int:
    return value.month


def in_month(value: datetime, month_index: int) -> bool:
    """True when ``value`` falls in the given calendar month of any year."""
    return value is not None and month_of(value) == month_index


def month_clause(column, month_index: int):
    """SQL form of in_month for ``column``."""
    return extract("month", column) == month_index
