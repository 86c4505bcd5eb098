from datetime import date, datetime, timedelta, timezone

import pytest

from salonpos.shared.exceptions import ValidationError
from salonpos.shared.timeutils import day_bounds, to_business_time
from salonpos.shared.validators import (
    normalize_name,
    normalize_phone,
    parse_iso_date,
    require_search_term,
)


def test_normalize_name():
    assert normalize_name("  Ana   María  ") == "Ana María"
    assert normalize_name(None) is None
    with pytest.raises(ValueError):
        normalize_name("   ")


@pytest.mark.parametrize("phone", ["+54 9 11 5555-1234", "(011) 4444.5555", "1155551234"])
def test_normalize_phone_accepts_common_formats(phone):
    assert normalize_phone(f" {phone} ") == phone


def test_normalize_phone_rejects_letters():
    assert normalize_phone("") is None
    with pytest.raises(ValueError):
        normalize_phone("11-CALL-ME")


def test_require_search_term():
    assert require_search_term("  la ") == "la"
    with pytest.raises(ValidationError):
        require_search_term(" l ")
    with pytest.raises(ValidationError):
        require_search_term(None)


def test_parse_iso_date():
    assert parse_iso_date("2025-10-27") == date(2025, 10, 27)
    with pytest.raises(ValidationError):
        parse_iso_date(None)
    with pytest.raises(ValidationError):
        parse_iso_date("2025-02-30")


def test_to_business_time():
    naive = to_business_time(datetime(2025, 10, 27, 10, 0))
    assert naive.hour == 10
    assert naive.utcoffset().total_seconds() == -3 * 3600

    converted = to_business_time(datetime(2025, 10, 28, 2, 30, tzinfo=timezone.utc))
    assert (converted.day, converted.hour, converted.minute) == (27, 23, 30)

    assert to_business_time(None) is None


def test_day_bounds_are_half_open_local_midnights():
    start, end = day_bounds(date(2025, 10, 27))
    assert (start.day, start.hour) == (27, 0)
    assert (end.day, end.hour) == (28, 0)
    assert end - start == timedelta(days=1)
