from __future__ import annotations

import re

import pytest

from attendance_sheet.models.attendance import DailyEntry
from attendance_sheet.models.period import Period, period_from_name
from attendance_sheet.services.period_filter import day_number, filter_entries

"""Unit tests for day-label parsing and period filtering."""

LABELLED = [re.compile(r"^day\s*(\d+)$", re.IGNORECASE)]


def _entries(*labels: str) -> list[DailyEntry]:
    return [DailyEntry(label, "P") for label in labels]


def test_first_half_boundary():
    kept = filter_entries(_entries("14", "15", "16"), Period.first_half())
    assert [e.label for e in kept] == ["14", "15"]


def test_second_half_boundary():
    kept = filter_entries(_entries("15", "16", "31"), Period.second_half())
    assert [e.label for e in kept] == ["16", "31"]


def test_full_period_accepts_day_31_without_calendar_check():
    kept = filter_entries(_entries("1", "31", "32"), Period.full())
    assert [e.label for e in kept] == ["1", "31"]


def test_non_integer_labels_are_excluded():
    kept = filter_entries(_entries("", "x", "2024-03-05", " 3 "), Period.full())
    assert [e.label for e in kept] == [" 3 "]


def test_labelled_day_headers_are_filterable():
    kept = filter_entries(_entries("Day 1", "Day 20", "day3"), Period.first_half())
    assert [e.label for e in kept] == ["Day 1", "day3"]


def test_custom_range_and_order_preserved():
    kept = filter_entries(_entries("9", "3", "5", "12"), Period.custom(3, 9))
    assert [e.label for e in kept] == ["9", "3", "5"]


def test_inverted_custom_range_matches_nothing():
    assert filter_entries(_entries("3", "5"), Period.custom(9, 3)) == ()


def test_day_number():
    assert day_number("7") == 7
    assert day_number(" 07 ") == 7
    assert day_number("Day 7") is None
    assert day_number("Day 7", LABELLED) == 7
    assert day_number("Total", LABELLED) is None


def test_period_from_name():
    assert period_from_name("first-half") == Period(1, 15, "first-half")
    assert period_from_name(" FULL ") == Period.full()
    with pytest.raises(ValueError):
        period_from_name("quarter")


def test_period_label():
    assert Period.second_half().label == "Day 16-31"


@pytest.mark.parametrize("label", ["+3", "1_5", "-2", "٣", "３"])
def test_non_ascii_or_signed_labels_are_not_days(label):
    assert day_number(label) is None
    assert filter_entries(_entries(label), Period.full()) == ()


def test_labelled_day_requires_ascii_digits():
    # the pattern's \d accepts any Unicode digit; the day number must still be ASCII
    assert day_number("Day ٣", LABELLED) is None
    assert day_number("Day 3", LABELLED) == 3
