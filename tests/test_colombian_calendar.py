"""Calendario: domingos, festivos (Ley Emiliani) y días especiales"""
from datetime import date

import pytest

from colombian_calendar import (
    FESTIVOS_FIJOS,
    carry_fixed_holidays,
    colombian_holidays,
    day_of_week,
    easter_sunday,
    is_holiday,
    is_special_day,
    is_sunday,
    next_calendar_day,
    next_monday,
    sundays_of_month,
)
from domain import HolidaySet, HolidaySetMismatch, InvalidDate


def test_sunday_is_day_zero():
    assert day_of_week(6, 7, 2025) == 0
    assert day_of_week(5, 7, 2025) == 6
    assert day_of_week(15, 7, 2025) == 2


def test_is_sunday():
    assert is_sunday(6, 7, 2025)
    assert not is_sunday(15, 7, 2025)


def test_sundays_of_month():
    assert sundays_of_month(7, 2025) == [6, 13, 20, 27]
    assert sundays_of_month(2, 2024) == [4, 11, 18, 25]


def test_invalid_date_raises():
    with pytest.raises(InvalidDate):
        is_sunday(31, 4, 2025)
    with pytest.raises(InvalidDate):
        is_special_day(29, 2, 2025, HolidaySet(2025))
    with pytest.raises(InvalidDate):
        is_sunday(1, 13, 2025)


def test_is_holiday_uses_supplied_set():
    festivos = HolidaySet(2025, frozenset({(7, 20)}))
    assert is_holiday(20, 7, 2025, festivos)
    assert not is_holiday(21, 7, 2025, festivos)
    assert not is_holiday(20, 7, 2025, None)


def test_special_day_is_sunday_or_holiday():
    festivos = HolidaySet(2025, frozenset({(7, 15)}))
    assert is_special_day(15, 7, 2025, festivos)   # martes festivo
    assert is_special_day(6, 7, 2025, festivos)    # domingo
    assert not is_special_day(14, 7, 2025, festivos)
    assert is_special_day(6, 7, 2025)


def test_next_calendar_day_rolls_over():
    assert next_calendar_day(31, 12, 2025) == (1, 1, 2026)
    assert next_calendar_day(28, 2, 2024) == (29, 2, 2024)
    assert next_calendar_day(30, 4, 2025) == (1, 5, 2025)


def test_easter_sunday():
    assert easter_sunday(2025) == date(2025, 4, 20)
    assert easter_sunday(2024) == date(2024, 3, 31)


def test_next_monday_keeps_mondays():
    assert next_monday(date(2025, 1, 6)) == date(2025, 1, 6)
    assert next_monday(date(2025, 3, 19)) == date(2025, 3, 24)


def test_colombian_holidays_2025():
    festivos = colombian_holidays(2025)
    esperados = [
        (1, 1), (1, 6), (3, 24), (4, 17), (4, 18), (5, 1), (6, 2), (6, 23),
        (6, 30), (7, 20), (8, 7), (8, 18), (10, 13), (11, 3), (11, 17),
        (12, 8), (12, 25),
    ]
    for pair in esperados:
        assert pair in festivos, pair
    assert festivos.year == 2025
    assert (7, 7) not in festivos
    assert festivos.for_month(6) == [2, 23, 30]


def test_holiday_set_from_dates():
    festivos = HolidaySet.from_dates(2025, [date(2025, 12, 25), date(2025, 1, 1)])
    assert len(festivos) == 2
    assert list(festivos) == [(1, 1), (12, 25)]
    assert festivos.contains(12, 25)


def test_holiday_set_of_another_year_is_rejected():
    with pytest.raises(HolidaySetMismatch):
        is_holiday(17, 4, 2026, colombian_holidays(2025))
    with pytest.raises(HolidaySetMismatch):
        is_special_day(6, 7, 2025, colombian_holidays(2024))  # domingo


def test_carry_fixed_holidays():
    arrastrados = carry_fixed_holidays(colombian_holidays(2025), 2026)
    assert arrastrados == HolidaySet(2026, FESTIVOS_FIJOS)
    assert (1, 6) not in arrastrados


def test_year_outside_range_is_invalid():
    with pytest.raises(InvalidDate):
        is_sunday(1, 1, 1850)
    with pytest.raises(InvalidDate):
        is_sunday(1, 1, 2101)
