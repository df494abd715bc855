"""Calendar-aware pricing: holiday table, tariff bands, and stay quotes."""

from cabin_rentals.pricing.calendar import ARGENTINA_HOLIDAYS, HolidayCalendar, default_calendar
from cabin_rentals.pricing.engine import (
    DayEntry,
    DayType,
    PriceQuote,
    PriceSummary,
    Tariffs,
    classify_day,
    day_rate,
    format_ars,
    is_holiday,
    quote,
    summarize,
)

__all__ = [
    "ARGENTINA_HOLIDAYS",
    "DayEntry",
    "DayType",
    "HolidayCalendar",
    "PriceQuote",
    "PriceSummary",
    "Tariffs",
    "classify_day",
    "day_rate",
    "default_calendar",
    "format_ars",
    "is_holiday",
    "quote",
    "summarize",
]
