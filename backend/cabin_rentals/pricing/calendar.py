"""Holiday calendar — immutable year -> dates table used to classify days."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from types import MappingProxyType

from cabin_rentals.config import settings

# National holidays (feriados) and bridge days (días puente) of Argentina.
ARGENTINA_HOLIDAYS: dict[int, tuple[str, ...]] = {
    2024: (
        "2024-01-01",  # Año Nuevo
        "2024-02-12",  # Carnaval
        "2024-02-13",  # Carnaval
        "2024-03-24",  # Día de la Memoria
        "2024-03-29",  # Viernes Santo
        "2024-04-01",  # Puente turístico
        "2024-04-02",  # Veteranos y Caídos en Malvinas
        "2024-05-01",  # Día del Trabajador
        "2024-05-25",  # Revolución de Mayo
        "2024-06-17",  # Güemes
        "2024-06-20",  # Día de la Bandera
        "2024-06-21",  # Puente turístico
        "2024-07-09",  # Día de la Independencia
        "2024-08-17",  # San Martín
        "2024-10-11",  # Puente turístico
        "2024-10-12",  # Diversidad Cultural
        "2024-11-18",  # Soberanía Nacional (trasladado)
        "2024-12-08",  # Inmaculada Concepción
        "2024-12-25",  # Navidad
    ),
    2026: (
        "2026-01-01",  # Año Nuevo
        "2026-02-16",  # Carnaval
        "2026-02-17",  # Carnaval
        "2026-03-24",  # Día de la Memoria
        "2026-04-02",  # Veteranos y Caídos en Malvinas
        "2026-04-03",  # Viernes Santo
        "2026-05-01",  # Día del Trabajador
        "2026-05-25",  # Revolución de Mayo
        "2026-06-17",  # Güemes
        "2026-06-20",  # Día de la Bandera
        "2026-07-09",  # Día de la Independencia
        "2026-08-17",  # San Martín
        "2026-10-12",  # Diversidad Cultural
        "2026-11-16",  # Soberanía Nacional (trasladado)
        "2026-12-08",  # Inmaculada Concepción
        "2026-12-25",  # Navidad
    ),
}


@dataclass(frozen=True)
class HolidayCalendar:
    """Read-only mapping of calendar year to its holiday dates.

    Years missing from the table have no holidays; covering a new year is a
    data change (:meth:`with_dates` or ``EXTRA_HOLIDAYS``), not a code change.
    """

    _by_year: Mapping[int, frozenset[date]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dates(cls, dates: Iterable[date | str]) -> HolidayCalendar:
        by_year: dict[int, set[date]] = {}
        for value in dates:
            day = date.fromisoformat(value) if isinstance(value, str) else value
            by_year.setdefault(day.year, set()).add(day)
        return cls(MappingProxyType({year: frozenset(days) for year, days in by_year.items()}))

    def with_dates(self, dates: Iterable[date | str]) -> HolidayCalendar:
        """Return a new calendar holding this calendar's dates plus ``dates``."""
        existing = [day for days in self._by_year.values() for day in days]
        return HolidayCalendar.from_dates([*existing, *dates])

    def is_holiday(self, day: date) -> bool:
        return day in self._by_year.get(day.year, frozenset())

    def holidays_in(self, year: int) -> list[date]:
        return sorted(self._by_year.get(year, frozenset()))

    @property
    def years(self) -> list[int]:
        return sorted(self._by_year)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.is_holiday(day)

    def __len__(self) -> int:
        return sum(len(days) for days in self._by_year.values())


@lru_cache(maxsize=1)
def default_calendar() -> HolidayCalendar:
    """Bundled Argentine holidays plus ``settings.extra_holidays``, built once per process."""
    bundled = [day for days in ARGENTINA_HOLIDAYS.values() for day in days]
    return HolidayCalendar.from_dates([*bundled, *settings.extra_holidays])
