"""Tests for month resolution and the month predicates."""

from datetime import datetime

import pytest

from sales_app.months import InvalidMonthError, in_month, month_of, resolve_month


@pytest.mark.parametrize(
    ("value", "expected"),
    [("January", 1), ("march", 3), ("DECEMBER", 12), (" June ", 6), ("Sep", 9), ("nov", 11), ("7", 7), ("03", 3)],
)
def test_resolve_month_accepts_names_abbreviations_and_numbers(value, expected) -> None:
    assert resolve_month(value) == expected


@pytest.mark.parametrize("value", ["", "Marchh", "13", "0", "2021-03", None])
def test_resolve_month_rejects_unknown_values(value) -> None:
    with pytest.raises(InvalidMonthError):
        resolve_month(value)


def test_invalid_month_error_is_a_value_error() -> None:
    assert issubclass(InvalidMonthError, ValueError)


def test_in_month_ignores_year() -> None:
    assert in_month(datetime(2021, 3, 5), 3) is True
    assert in_month(datetime(1999, 3, 31, 23, 59), 3) is True
    assert in_month(datetime(2021, 4, 1), 3) is False


def test_in_month_is_false_for_missing_dates() -> None:
    assert in_month(None, 3) is False


def test_month_of_returns_calendar_month() -> None:
    assert month_of(datetime(2022, 11, 3)) == 11
