"""Pricing engine — nightly tariffs by day type and price quotes for a stay."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

from cabin_rentals.config import settings
from cabin_rentals.dates import CivilDateInput, DateRange, to_civil_date
from cabin_rentals.pricing.calendar import HolidayCalendar, default_calendar

# Indexed by weekday with 0 = Sunday.
WEEKDAY_NAMES = ("Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado")


class DayType(StrEnum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


@dataclass(frozen=True)
class Tariffs:
    """Nightly rate per tariff band, in the smallest currency unit."""

    weekday: int
    weekend: int
    holiday: int

    @classmethod
    def from_settings(cls) -> Tariffs:
        return cls(
            weekday=settings.rate_weekday,
            weekend=settings.rate_weekend,
            holiday=settings.rate_holiday,
        )

    def rate_for(self, day_type: DayType) -> int:
        return getattr(self, day_type.value)

    def to_dict(self) -> dict[str, int]:
        return {"weekday": self.weekday, "weekend": self.weekend, "holiday": self.holiday}


@dataclass(frozen=True)
class DayEntry:
    date: date
    weekday: int  # 0 = Sunday
    weekday_name: str
    rate: int
    day_type: DayType
    night_number: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "weekday": self.weekday,
            "weekday_name": self.weekday_name,
            "rate": self.rate,
            "day_type": self.day_type.value,
            "night_number": self.night_number,
        }


@dataclass(frozen=True)
class PriceQuote:
    check_in: date
    check_out: date
    days: tuple[DayEntry, ...]
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "days": [entry.to_dict() for entry in self.days],
            "total": self.total,
        }


@dataclass(frozen=True)
class PriceSummary:
    """Quote plus per-type day counts and a display-formatted total."""

    quote: PriceQuote
    tariffs: Tariffs
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def total_formatted(self) -> str:
        return format_ars(self.quote.total)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.quote.to_dict(),
            "total_days": len(self.quote.days),
            "total_formatted": self.total_formatted,
            "counts": dict(self.counts),
            "tariffs": self.tariffs.to_dict(),
        }


def format_ars(amount: int) -> str:
    """Format an amount of pesos the way es-AR does: ``$ 510.000``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}$ {abs(amount):,}".replace(",", ".")


def sunday_based_weekday(day: date) -> int:
    """Weekday index with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def is_holiday(day: CivilDateInput, calendar: HolidayCalendar | None = None) -> bool:
    cal = default_calendar() if calendar is None else calendar
    return cal.is_holiday(to_civil_date(day))


def classify_day(day: CivilDateInput, calendar: HolidayCalendar | None = None) -> DayType:
    """Holiday beats weekend, weekend beats weekday."""
    civil = to_civil_date(day)
    if is_holiday(civil, calendar):
        return DayType.HOLIDAY
    if sunday_based_weekday(civil) in (0, 6):
        return DayType.WEEKEND
    return DayType.WEEKDAY


def day_rate(
    day: CivilDateInput,
    tariffs: Tariffs | None = None,
    calendar: HolidayCalendar | None = None,
) -> int:
    """Nightly rate charged for ``day``."""
    rates = Tariffs.from_settings() if tariffs is None else tariffs
    return rates.rate_for(classify_day(day, calendar))


def quote(
    date_range: DateRange,
    tariffs: Tariffs | None = None,
    calendar: HolidayCalendar | None = None,
) -> PriceQuote:
    """Price every day from ``date_range.start`` through ``date_range.end``.

    Both endpoints are charged: the checkout date is priced like any other
    day. This is the opposite of the half-open convention used for
    availability and is kept as the observed behaviour of the platform.
    """
    rates = Tariffs.from_settings() if tariffs is None else tariffs
    cal = default_calendar() if calendar is None else calendar

    entries: list[DayEntry] = []
    total = 0
    for number, day in enumerate(date_range.days_inclusive(), start=1):
        day_type = classify_day(day, cal)
        rate = rates.rate_for(day_type)
        weekday = sunday_based_weekday(day)
        entries.append(
            DayEntry(
                date=day,
                weekday=weekday,
                weekday_name=WEEKDAY_NAMES[weekday],
                rate=rate,
                day_type=day_type,
                night_number=number,
            )
        )
        total += rate

    return PriceQuote(
        check_in=date_range.start,
        check_out=date_range.end,
        days=tuple(entries),
        total=total,
    )


def summarize(price_quote: PriceQuote, tariffs: Tariffs | None = None) -> PriceSummary:
    """Count the quoted days per tariff band."""
    counts = {day_type.value: 0 for day_type in DayType}
    for entry in price_quote.days:
        counts[entry.day_type.value] += 1
    return PriceSummary(
        quote=price_quote,
        tariffs=Tariffs.from_settings() if tariffs is None else tariffs,
        counts=counts,
    )
