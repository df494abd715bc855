"""Civil dates anchored to the fixed Argentina zone (UTC-3).

Every date that enters the booking core goes through :func:`to_civil_date`.
A timestamp is read as the calendar date written in it, never converted
between zones: a client sending ``2024-06-07T00:00:00Z`` for a picked
7 June means 7 June in Argentina.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from cabin_rentals.errors import ValidationError

ARGENTINA_TZ = timezone(timedelta(hours=-3), name="UTC-03:00")

CivilDateInput = date | datetime | str


def to_civil_date(value: CivilDateInput) -> date:
    """Return the civil date ``value`` denotes in the fixed zone.

    - ``date``: returned as-is.
    - ``datetime``, aware or naive: the date as written, the offset is ignored.
    - ``str``: ``YYYY-MM-DD`` or an ISO-8601 datetime, then as above.

    Raises:
        ValidationError: If ``value`` is empty or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Date is required, use YYYY-MM-DD")
        try:
            if "T" not in text and " " not in text:
                return date.fromisoformat(text)
            return to_civil_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            raise ValidationError(f"Invalid date {value!r}, use YYYY-MM-DD") from None
    raise ValidationError(f"Unsupported date value: {value!r}")


def today() -> date:
    """Current civil date in the fixed zone."""
    return datetime.now(ARGENTINA_TZ).date()


@dataclass(frozen=True, slots=True)
class DateRange:
    """A ``(start, end)`` pair of civil dates with ``start < end``.

    Availability treats the range as half-open (``end`` is the checkout
    day). The pricing engine iterates it inclusively; see
    :func:`cabin_rentals.pricing.engine.quote`.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValidationError(
                "End date must be after start date",
                details={"start": self.start.isoformat(), "end": self.end.isoformat()},
            )

    @classmethod
    def parse(cls, start: CivilDateInput | None, end: CivilDateInput | None) -> DateRange:
        """Build a range from raw request values, normalising both ends to civil dates."""
        if start is None or end is None:
            raise ValidationError("Both start and end dates are required (YYYY-MM-DD)")
        return cls(to_civil_date(start), to_civil_date(end))

    @property
    def nights(self) -> int:
        return (self.end - self.start).days

    def overlaps(self, start: date, end: date) -> bool:
        """Half-open overlap test; a stay ending on ``self.start`` does not overlap."""
        return end > self.start and start < self.end

    def nights_iter(self) -> Iterator[date]:
        """Every night of the stay: ``start`` up to, not including, ``end``."""
        for offset in range(self.nights):
            yield self.start + timedelta(days=offset)

    def days_inclusive(self) -> Iterator[date]:
        """Every calendar day from ``start`` through ``end``, both included."""
        for offset in range(self.nights + 1):
            yield self.start + timedelta(days=offset)

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}
