"""Pydantic v2 response schemas for pricing endpoints."""

from pydantic import BaseModel


class DayEntryResponse(BaseModel):
    date: str
    weekday: int
    weekday_name: str
    rate: int
    day_type: str
    night_number: int


class QuoteResponse(BaseModel):
    """Day-by-day price breakdown of a stay."""

    check_in: str
    check_out: str
    days: list[DayEntryResponse]
    total: int


class TariffsResponse(BaseModel):
    weekday: int
    weekend: int
    holiday: int


class SummaryResponse(QuoteResponse):
    """Quote plus counts per tariff band and the formatted total."""

    total_days: int
    total_formatted: str
    counts: dict[str, int]
    tariffs: TariffsResponse


class DayRateResponse(BaseModel):
    date: str
    weekday: int
    weekday_name: str
    day_type: str
    is_holiday: bool
    rate: int
