# domain.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Iterable, Iterator

# Porcentajes legales (solo informativos, no se liquida dinero aquí)
PORCENTAJES_RECARGO = {
    "HED": 25,
    "HEN": 75,
    "HEFD": 100,
    "HEFN": 150,
    "RN": 35,
    "RD": 75,
}

DESCRIPCIONES_RECARGO = {
    "HED": "Hora Extra Diurna",
    "HEN": "Hora Extra Nocturna",
    "HEFD": "Hora Extra Festiva Diurna",
    "HEFN": "Hora Extra Festiva Nocturna",
    "RN": "Recargo Nocturno",
    "RD": "Recargo Dominical/Festivo",
}

BUCKETS = ("HED", "HEN", "HEFD", "HEFN", "RN", "RD")

HORAS_LIMITE = {
    "JORNADA_ORDINARIA": 8.0,
    "INICIO_NOCTURNO": 21,
    "FIN_NOCTURNO": 6,
}

# Rango de años aceptado (mismo que el formulario)
AÑO_MIN, AÑO_MAX = 1900, 2100


class RecargoError(ValueError):
    """Base error for bad shift or calendar input."""


class InvalidShift(RecargoError):
    """Start/end hours that do not describe a positive, half-hour aligned shift."""


class InvalidDate(RecargoError):
    """day/month/year that do not form a calendar date."""


class HolidaySetMismatch(RecargoError):
    """A HolidaySet built for a different year than the date being classified."""


@dataclass
class WorkShift:
    """One driver's working interval on one calendar day."""
    day: int
    month: int
    year: int
    start_hour: float
    end_hour: float


@dataclass(frozen=True)
class HolidaySet:
    """(month, day) pairs of public holidays for one year."""
    year: int
    days: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_dates(cls, year: int, dates: Iterable[date]) -> "HolidaySet":
        return cls(year, frozenset((d.month, d.day) for d in dates))

    def contains(self, month: int, day: int) -> bool:
        return (month, day) in self.days

    def for_month(self, month: int) -> list[int]:
        """Holiday day numbers of `month`, sorted."""
        return sorted(d for m, d in self.days if m == month)

    def __contains__(self, item) -> bool:
        return item in self.days

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(sorted(self.days))

    def __len__(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class HourUnit:
    """A clock-hour slice [start, end) of a shift.

    `start`/`end` are measured from 00:00 of the shift's origin day, so the
    part of a shift after midnight lives in 24–48 and has `next_day` set.
    """
    start: float
    end: float
    is_night: bool
    next_day: bool

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class ShiftTotals:
    HED: float = 0.0
    HEN: float = 0.0
    HEFD: float = 0.0
    HEFN: float = 0.0
    RN: float = 0.0
    RD: float = 0.0
    total_hours: float = 0.0

    def __add__(self, other: "ShiftTotals") -> "ShiftTotals":
        if not isinstance(other, ShiftTotals):
            return NotImplemented
        return ShiftTotals(**{
            f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)
        })

    @property
    def overtime_hours(self) -> float:
        return self.HED + self.HEN + self.HEFD + self.HEFN

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


ShiftTotals.ZERO = ShiftTotals()
