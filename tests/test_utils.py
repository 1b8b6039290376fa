"""Utilidades de formato y tabla de recargos"""
import pandas as pd
import pytest

from colombian_calendar import colombian_holidays
from domain import ShiftTotals, WorkShift
from services import summarize_period
from utils import filas_a_turnos, format_hours, parse_hour, recargos_to_dataframe, resumen_tipo_horas


@pytest.mark.parametrize("texto,esperado", [("08:30", 8.5), ("21:00", 21.0), ("21", 21.0), ("8,5", 8.5), (" 6.5 ", 6.5)])
def test_parse_hour(texto, esperado):
    assert parse_hour(texto) == esperado


def test_parse_hour_rejects_garbage():
    with pytest.raises(ValueError):
        parse_hour("ocho")


def test_format_hours():
    assert format_hours(8.5) == "08:30"
    assert format_hours(0) == "00:00"
    assert format_hours(22) == "22:00"


def test_resumen_only_lists_buckets_with_hours():
    resumen = resumen_tipo_horas(ShiftTotals(HED=1, RD=8, total_hours=9))
    assert [r["tipo"] for r in resumen] == ["HED", "RD"]
    assert resumen[0]["porcentaje"] == "25%"
    assert resumen[1]["descripcion"] == "Recargo Dominical/Festivo"


def test_recargos_dataframe_rows_and_errors():
    festivos = colombian_holidays(2025)
    resumen = summarize_period(
        [WorkShift(20, 7, 2025, 6.0, 18.0), WorkShift(15, 7, 2025, 8.0, 17.0), WorkShift(16, 7, 2025, 10.0, 10.0)],
        festivos,
    )
    df = recargos_to_dataframe(resumen, festivos)
    assert list(df["Día"]) == [15, 16, 20]
    assert df.loc[0, "Día semana"] == "Martes"
    assert df.loc[0, "HED"] == 1
    assert df.loc[1, "Error"] != ""
    assert df.loc[1, "Total"] == 0
    assert bool(df.loc[2, "Festivo"]) and bool(df.loc[2, "Domingo"])
    assert df.loc[2, "RD"] == 8


def test_recargos_dataframe_empty():
    assert recargos_to_dataframe(summarize_period([])).empty


def test_filas_a_turnos_skips_incomplete_rows():
    """Celdas vacías (None, NaN o texto en blanco) no se tratan como horas"""
    df = pd.DataFrame({
        "Día": [15, 16, 17, None, 18],
        "Inicio": ["08:00", float("nan"), "  ", "08:00", "22:00"],
        "Fin": ["17:00", "17:00", "12:00", "17:00", None],
    })
    turnos, avisos = filas_a_turnos(df, 7, 2025)
    assert turnos == [WorkShift(15, 7, 2025, 8.0, 17.0)]
    assert avisos == []


def test_filas_a_turnos_reports_unparseable_hours():
    df = pd.DataFrame({"Día": [15, 16], "Inicio": ["ocho", "22:30"], "Fin": ["17:00", "2"]})
    turnos, avisos = filas_a_turnos(df, 7, 2025)
    assert turnos == [WorkShift(16, 7, 2025, 22.5, 2.0)]
    assert avisos == ["Fila 1: hora inválida (ocho - 17:00)."]
