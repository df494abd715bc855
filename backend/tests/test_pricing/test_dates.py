"""Unit tests for civil-date normalisation and DateRange."""

from datetime import date, datetime, timedelta, timezone

import pytest

from cabin_rentals.dates import ARGENTINA_TZ, DateRange, to_civil_date
from cabin_rentals.errors import ValidationError


class TestToCivilDate:
    def test_plain_date_string(self):
        assert to_civil_date("2024-05-24") == date(2024, 5, 24)

    def test_date_passthrough(self):
        assert to_civil_date(date(2024, 5, 24)) == date(2024, 5, 24)

    def test_midnight_utc_keeps_calendar_date(self):
        assert to_civil_date(datetime(2024, 5, 24, 0, 0, tzinfo=timezone.utc)) == date(2024, 5, 24)

    def test_browser_iso_string_keeps_calendar_date(self):
        assert to_civil_date("2024-06-07T00:00:00.000Z") == date(2024, 6, 7)

    def test_offset_is_ignored(self):
        assert to_civil_date("2024-05-24T23:30:00-03:00") == date(2024, 5, 24)
        assert to_civil_date("2024-05-25T01:00:00+02:00") == date(2024, 5, 25)
        assert to_civil_date(datetime(2024, 5, 24, 23, 0, tzinfo=timezone(timedelta(hours=5)))) == date(2024, 5, 24)

    def test_naive_datetime_keeps_its_date(self):
        assert to_civil_date(datetime(2024, 5, 24, 23, 59)) == date(2024, 5, 24)

    def test_zone_is_fixed_utc_minus_three(self):
        assert ARGENTINA_TZ.utcoffset(None) == timedelta(hours=-3)

    @pytest.mark.parametrize("value", ["", "   ", "24/05/2024", "2024-02-30", "not-a-date", "2024-13-01T10:00"])
    def test_unparseable_values_raise(self, value):
        with pytest.raises(ValidationError):
            to_civil_date(value)

    def test_unsupported_type_raises(self):
        with pytest.raises(ValidationError):
            to_civil_date(20240524)  # type: ignore[arg-type]


class TestDateRange:
    def test_nights(self):
        assert DateRange(date(2024, 6, 1), date(2024, 6, 5)).nights == 4

    def test_equal_dates_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            DateRange(date(2024, 6, 1), date(2024, 6, 1))
        assert exc_info.value.kind == "validation_error"

    def test_reversed_dates_rejected(self):
        with pytest.raises(ValidationError):
            DateRange(date(2024, 6, 5), date(2024, 6, 1))

    def test_parse_requires_both_ends(self):
        with pytest.raises(ValidationError):
            DateRange.parse("2024-06-01", None)

    def test_parse_normalises_strings(self):
        assert DateRange.parse("2024-06-01", "2024-06-05T10:00:00-03:00") == DateRange(
            date(2024, 6, 1), date(2024, 6, 5)
        )

    def test_overlap_is_half_open(self):
        stay = DateRange(date(2024, 6, 5), date(2024, 6, 8))
        assert not stay.overlaps(date(2024, 6, 1), date(2024, 6, 5))
        assert stay.overlaps(date(2024, 6, 1), date(2024, 6, 6))
        assert not stay.overlaps(date(2024, 6, 8), date(2024, 6, 10))

    def test_nights_exclude_checkout_days_include_it(self):
        stay = DateRange(date(2024, 6, 1), date(2024, 6, 3))
        assert list(stay.nights_iter()) == [date(2024, 6, 1), date(2024, 6, 2)]
        assert list(stay.days_inclusive()) == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
