"""Tests for age calculation."""

from datetime import date

import pytest

from course_library.utils.dates import get_current_age


@pytest.mark.parametrize(
    "today,expected",
    [
        (date(2020, 7, 22), 39),
        (date(2020, 7, 23), 40),
        (date(2020, 12, 31), 40),
    ],
)
def test_get_current_age(today, expected):
    assert get_current_age(date(1980, 7, 23), today) == expected


def test_leap_day_birthday():
    assert get_current_age(date(2000, 2, 29), date(2021, 2, 28)) == 20
    assert get_current_age(date(2000, 2, 29), date(2021, 3, 1)) == 21
