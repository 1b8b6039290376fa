# services.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from colombian_calendar import carry_fixed_holidays, is_special_day, make_date, next_calendar_day
from domain import (
    AÑO_MAX,
    AÑO_MIN,
    HORAS_LIMITE,
    HolidaySet,
    HourUnit,
    InvalidShift,
    ShiftTotals,
    WorkShift,
)

logger = logging.getLogger(__name__)


def _check_hour(value, label: str) -> list[str]:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return [f"La hora {label} no es un número válido"]
    if math.isnan(v) or v < 0 or v > 24:
        return [f"La hora {label} debe estar entre 0 y 24"]
    if (v * 2) % 1 != 0:
        return [f"La hora {label} debe ir en pasos de media hora"]
    return []


def _resolve_end(start: float, end: float) -> float:
    """End hour on the origin day's clock, wrapping past midnight when needed."""
    if end >= start:
        return end
    if end == 0:
        return 24.0
    return end + 24.0


def validate_hours(start_hour, end_hour) -> list[str]:
    errores = _check_hour(start_hour, "inicial") + _check_hour(end_hour, "final")
    if errores:
        return errores
    start, end = float(start_hour), float(end_hour)
    if _resolve_end(start, end) - start <= 0:
        errores.append("La hora final no puede ser igual a la hora inicial")
    return errores


def validate_shift(shift: WorkShift) -> list[str]:
    """Returns user-facing messages for every problem found (empty list if valid)."""
    errores: list[str] = []
    if not 1 <= int(shift.month) <= 12:
        errores.append("El mes debe estar entre 1 y 12")
    if not AÑO_MIN <= int(shift.year) <= AÑO_MAX:
        errores.append(f"El año debe estar entre {AÑO_MIN} y {AÑO_MAX}")
    if not errores:
        try:
            make_date(shift.day, shift.month, shift.year)
        except ValueError:
            errores.append(f"El día {shift.day} no existe en {shift.month}/{shift.year}")
    return errores + validate_hours(shift.start_hour, shift.end_hour)


def shift_duration(start_hour: float, end_hour: float) -> float:
    errores = validate_hours(start_hour, end_hour)
    if errores:
        raise InvalidShift("; ".join(errores))
    start = float(start_hour)
    return _resolve_end(start, float(end_hour)) - start


class SurchargeCalculator:
    """Business rules for splitting a shift into overtime and surcharge hours."""

    def __init__(
        self,
        ordinary_threshold: float = HORAS_LIMITE["JORNADA_ORDINARIA"],
        night_start: int = HORAS_LIMITE["INICIO_NOCTURNO"],
        night_end: int = HORAS_LIMITE["FIN_NOCTURNO"],
    ):
        self.ordinary_threshold = ordinary_threshold
        self.night_start = night_start
        self.night_end = night_end

    def is_night_hour(self, clock_hour: int) -> bool:
        h = clock_hour % 24
        return h >= self.night_start or h < self.night_end

    def expand_to_hour_units(self, start_hour: float, end_hour: float) -> list[HourUnit]:
        """
        Splits a shift into clock-hour units [h, h+1) clipped to the shift.
        Units past 24:00 belong to the next calendar day.
        """
        duration = shift_duration(start_hour, end_hour)
        start = float(start_hour)
        end = start + duration

        units: list[HourUnit] = []
        h = math.floor(start)
        while h < end:
            u_start, u_end = max(float(h), start), min(float(h + 1), end)
            if u_end > u_start:
                units.append(HourUnit(u_start, u_end, self.is_night_hour(h), h >= 24))
            h += 1
        return units

    def classify_shift(self, shift: WorkShift, is_special_origin: bool, is_special_next: bool) -> ShiftTotals:
        """
        Buckets every unit of `shift`. The first `ordinary_threshold` hours are
        ordinary (RN/RD only); the rest are overtime.

        HED and HEFD come out of the legacy subtraction identity:
            HED  = overtime on ordinary days - HEN
            HEFD = overtime on Sundays/holidays - HEFN
        """
        units = self.expand_to_hour_units(shift.start_hour, shift.end_hour)

        ordinary_left = self.ordinary_threshold
        rn = rd = hen = hefn = 0.0
        overtime_plain = overtime_special = 0.0
        for unit in units:
            special = is_special_next if unit.next_day else is_special_origin
            ordinary = max(0.0, min(unit.duration, ordinary_left))
            overtime = unit.duration - ordinary
            ordinary_left -= ordinary

            if ordinary:
                if unit.is_night:
                    rn += ordinary
                if special:
                    rd += ordinary
            if overtime:
                if special:
                    overtime_special += overtime
                    if unit.is_night:
                        hefn += overtime
                else:
                    overtime_plain += overtime
                    if unit.is_night:
                        hen += overtime

        return ShiftTotals(
            HED=round(overtime_plain - hen, 2),
            HEN=round(hen, 2),
            HEFD=round(overtime_special - hefn, 2),
            HEFN=round(hefn, 2),
            RN=round(rn, 2),
            RD=round(rd, 2),
            total_hours=round(sum(u.duration for u in units), 2),
        )

    def compute_shift_surcharges(
        self,
        day: int,
        month: int,
        year: int,
        start_hour: float,
        end_hour: float,
        holiday_set: HolidaySet | None = None,
        next_year_holidays: HolidaySet | None = None,
    ) -> ShiftTotals:
        """
        `holiday_set` must be built for `year`. When a Dec 31 shift runs into
        Jan 1, the next day is looked up in `next_year_holidays`, or, if that
        is not given, in the fixed-date holidays of `holiday_set`.
        """
        shift = WorkShift(day, month, year, start_hour, end_hour)
        special_origin = is_special_day(day, month, year, holiday_set)
        special_next = False
        if float(start_hour) + shift_duration(start_hour, end_hour) > 24:
            n_day, n_month, n_year = next_calendar_day(day, month, year)
            next_set = holiday_set
            if holiday_set is not None and n_year != int(year):
                next_set = next_year_holidays or carry_fixed_holidays(holiday_set, n_year)
            special_next = is_special_day(n_day, n_month, n_year, next_set)
        totals = self.classify_shift(shift, special_origin, special_next)
        logger.debug(
            "Recargos %02d/%02d/%d %s-%s: %s", day, month, year, start_hour, end_hour, totals.as_dict()
        )
        return totals

    @staticmethod
    def sum_shift_totals(totals: Iterable[ShiftTotals]) -> ShiftTotals:
        return sum(totals, ShiftTotals())


@dataclass
class ShiftResult:
    shift: WorkShift
    totals: ShiftTotals | None = None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass
class PeriodSummary:
    """Per-row results of a pay period plus the totals of the valid rows."""
    rows: list[ShiftResult] = field(default_factory=list)

    @property
    def totals(self) -> ShiftTotals:
        return sum_shift_totals(r.totals for r in self.rows if r.is_valid)

    @property
    def invalid_rows(self) -> list[ShiftResult]:
        return [r for r in self.rows if not r.is_valid]


_default_calculator = SurchargeCalculator()


def expand_to_hour_units(start_hour: float, end_hour: float) -> list[HourUnit]:
    return _default_calculator.expand_to_hour_units(start_hour, end_hour)


def compute_shift_surcharges(
    day: int,
    month: int,
    year: int,
    start_hour: float,
    end_hour: float,
    holiday_set: HolidaySet | None = None,
    next_year_holidays: HolidaySet | None = None,
) -> ShiftTotals:
    return _default_calculator.compute_shift_surcharges(
        day, month, year, start_hour, end_hour, holiday_set, next_year_holidays
    )


def sum_shift_totals(totals: Iterable[ShiftTotals]) -> ShiftTotals:
    return SurchargeCalculator.sum_shift_totals(totals)


def summarize_period(
    shifts: Sequence[WorkShift],
    holiday_set: HolidaySet | None = None,
    calculator: SurchargeCalculator | None = None,
    next_year_holidays: HolidaySet | None = None,
) -> PeriodSummary:
    """Computes every row; invalid rows keep their message and stay out of the totals."""
    calc = calculator or _default_calculator
    summary = PeriodSummary()
    for s in shifts:
        errores = validate_shift(s)
        if errores:
            msg = "; ".join(errores)
            logger.warning("Fila excluida (día %s): %s", s.day, msg)
            summary.rows.append(ShiftResult(s, error=msg))
            continue
        totals = calc.compute_shift_surcharges(
            s.day, s.month, s.year, s.start_hour, s.end_hour, holiday_set, next_year_holidays
        )
        summary.rows.append(ShiftResult(s, totals=totals))
    return summary
