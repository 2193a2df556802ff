from datetime import datetime

import pytest

from work_reports.common.datetime_utils import day_window, month_window, parse_period
from work_reports.common.validators import canonical_name, parse_identifier
from work_reports.core.exceptions import ValidationError


def test_day_window_bounds(fixed_now):
    start, end = day_window(fixed_now)

    assert start == datetime(2026, 2, 3, 0, 0, 0)
    assert end == datetime(2026, 2, 3, 23, 59, 59, 999000)
    assert start <= datetime(2026, 2, 3, 23, 59, 59, 998000) <= end
    assert not start <= datetime(2026, 2, 4, 0, 0, 0, 1000) <= end


def test_month_window_handles_december():
    start, end = month_window(2025, 12)

    assert start == datetime(2025, 12, 1)
    assert end.date() == datetime(2025, 12, 31).date()


def test_parse_period_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_period("date", "yesterday")


@pytest.mark.parametrize("value", ["", "abc", "0", "-3", "1.5", None, True])
def test_parse_identifier_rejects_malformed(value):
    with pytest.raises(ValidationError):
        parse_identifier(value, "userId")


def test_parse_identifier_and_canonical_name():
    assert parse_identifier(" 42 ", "userId") == 42
    assert canonical_name("  Big   Project ") == "big project"
