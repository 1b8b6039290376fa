# colombian_calendar.py
from __future__ import annotations
import calendar
import logging
from datetime import date, timedelta

from domain import AÑO_MAX, AÑO_MIN, HolidaySet, HolidaySetMismatch, InvalidDate

logger = logging.getLogger(__name__)

DOMINGO = 0  # convención del sistema: 0 = domingo ... 6 = sábado

# Festivos de fecha fija (no se trasladan)
FESTIVOS_FIJOS = frozenset({(1, 1), (5, 1), (7, 20), (8, 7), (12, 8), (12, 25)})


def make_date(day: int, month: int, year: int) -> date:
    try:
        d = date(int(year), int(month), int(day))
    except (TypeError, ValueError) as e:
        raise InvalidDate(f"Fecha inválida {day}/{month}/{year}: {e}") from e
    if not AÑO_MIN <= d.year <= AÑO_MAX:
        raise InvalidDate(f"El año debe estar entre {AÑO_MIN} y {AÑO_MAX}")
    return d


def day_of_week(day: int, month: int, year: int) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return (make_date(day, month, year).weekday() + 1) % 7


def is_sunday(day: int, month: int, year: int) -> bool:
    return day_of_week(day, month, year) == DOMINGO


def is_holiday(day: int, month: int, year: int, holiday_set: HolidaySet | None) -> bool:
    make_date(day, month, year)
    if holiday_set is None:
        return False
    if holiday_set.year != int(year):
        raise HolidaySetMismatch(f"Festivos de {holiday_set.year} usados para una fecha de {year}")
    return holiday_set.contains(month, day)


def is_special_day(day: int, month: int, year: int, holiday_set: HolidaySet | None = None) -> bool:
    """Sunday or public holiday."""
    festivo = is_holiday(day, month, year, holiday_set)
    return is_sunday(day, month, year) or festivo


def next_calendar_day(day: int, month: int, year: int) -> tuple[int, int, int]:
    d = make_date(day, month, year) + timedelta(days=1)
    return d.day, d.month, d.year


def carry_fixed_holidays(holiday_set: HolidaySet, year: int) -> HolidaySet:
    """Fixed-date holidays of `holiday_set` relabelled for `year`."""
    return HolidaySet(year, holiday_set.days & FESTIVOS_FIJOS)


def sundays_of_month(month: int, year: int) -> list[int]:
    _, last_day = calendar.monthrange(year, month)
    return [d for d in range(1, last_day + 1) if is_sunday(d, month, year)]


# =========================
# Festivos de Colombia (Ley Emiliani)
# =========================
def easter_sunday(year: int) -> date:
    """
    Domingo de Pascua (calendario gregoriano) para 'year'.
    Algoritmo Meeus/Jones/Butcher.
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def next_monday(d: date) -> date:
    """Lunes de observancia (el mismo día si ya es lunes)."""
    return d + timedelta(days=(0 - d.weekday()) % 7)


def colombian_holidays(year: int) -> HolidaySet:
    """
    Festivos nacionales observados en Colombia para 'year':
      - Inamovibles (Año Nuevo, Trabajo, Independencia, Boyacá, Inmaculada, Navidad)
      - Jueves y Viernes Santo
      - Trasladables al lunes siguiente por Ley Emiliani
      - Móviles ligados a Pascua, observados en lunes
    """
    fest = {date(year, month, day) for month, day in FESTIVOS_FIJOS}

    easter = easter_sunday(year)
    fest.update({easter - timedelta(days=3), easter - timedelta(days=2)})

    for month, day in ((1, 6), (3, 19), (6, 29), (8, 15), (10, 12), (11, 1), (11, 11)):
        fest.add(next_monday(date(year, month, day)))

    fest.add(easter + timedelta(days=43))  # Ascensión
    fest.add(easter + timedelta(days=64))  # Corpus Christi
    fest.add(easter + timedelta(days=71))  # Sagrado Corazón

    logger.debug("Festivos %s: %d días", year, len(fest))
    return HolidaySet.from_dates(year, fest)
