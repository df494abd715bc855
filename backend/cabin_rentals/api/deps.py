"""Shared API dependencies — single import point for all routers.

Re-exports the database session and authentication dependencies, and turns
raw ``start``/``end`` query parameters into a :class:`DateRange`::

    from cabin_rentals.api.deps import get_db, require_admin, date_range_query
"""

from fastapi import Query

from cabin_rentals.auth.dependencies import (
    get_current_active_user,
    get_current_user,
    require_admin,
)
from cabin_rentals.database import get_db
from cabin_rentals.dates import DateRange


def date_range_query(
    start: str | None = Query(None, description="Check-in date, YYYY-MM-DD"),
    end: str | None = Query(None, description="Checkout date, YYYY-MM-DD"),
) -> DateRange:
    """Required date range; missing, malformed or reversed dates raise ValidationError."""
    return DateRange.parse(start, end)


def optional_date_range_query(
    start: str | None = Query(None, description="Window start, YYYY-MM-DD"),
    end: str | None = Query(None, description="Window end, YYYY-MM-DD"),
) -> DateRange | None:
    """Date window that may be omitted entirely, but not half-given."""
    if start is None and end is None:
        return None
    return DateRange.parse(start, end)


__all__ = [
    "date_range_query",
    "get_current_active_user",
    "get_current_user",
    "get_db",
    "optional_date_range_query",
    "require_admin",
]
