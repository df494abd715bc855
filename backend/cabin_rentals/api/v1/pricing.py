"""Pricing API routes — quotes for a stay and per-day tariff hints."""

from fastapi import APIRouter, Depends

from cabin_rentals.api.deps import date_range_query
from cabin_rentals.dates import DateRange, to_civil_date
from cabin_rentals.pricing import classify_day, day_rate, is_holiday, quote, summarize
from cabin_rentals.pricing.engine import WEEKDAY_NAMES, sunday_based_weekday
from cabin_rentals.schemas.pricing import DayRateResponse, QuoteResponse, SummaryResponse

router = APIRouter(prefix="/api/v1/pricing", tags=["pricing"])


@router.get(
    "/quote",
    response_model=QuoteResponse,
    summary="Price a stay day by day",
)
async def get_quote(date_range: DateRange = Depends(date_range_query)) -> QuoteResponse:
    """Every day from ``start`` through ``end`` (both included) with its rate, plus the total."""
    return QuoteResponse(**quote(date_range).to_dict())


@router.get(
    "/summary",
    response_model=SummaryResponse,
    summary="Price a stay with per-band counts",
)
async def get_summary(date_range: DateRange = Depends(date_range_query)) -> SummaryResponse:
    return SummaryResponse(**summarize(quote(date_range)).to_dict())


@router.get(
    "/days/{day}",
    response_model=DayRateResponse,
    summary="Rate and classification of a single day",
)
async def get_day_rate(day: str) -> DayRateResponse:
    """Calendar UI hint: how a given night is priced."""
    civil = to_civil_date(day)
    weekday = sunday_based_weekday(civil)
    return DayRateResponse(
        date=civil.isoformat(),
        weekday=weekday,
        weekday_name=WEEKDAY_NAMES[weekday],
        day_type=classify_day(civil).value,
        is_holiday=is_holiday(civil),
        rate=day_rate(civil),
    )
