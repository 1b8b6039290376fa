# utils.py
import pandas as pd

from colombian_calendar import day_of_week, is_holiday, is_sunday
from domain import BUCKETS, DESCRIPCIONES_RECARGO, PORCENTAJES_RECARGO, HolidaySet, ShiftTotals, WorkShift
from services import PeriodSummary

DIAS_SEMANA = ["Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"]


def parse_hour(texto: str) -> float:
    """'08:30' -> 8.5; also accepts decimal strings like '8.5' or '21'."""
    s = str(texto).strip()
    if ":" in s:
        hh, mm = s.split(":")
        return int(hh) + int(mm) / 60
    return float(s.replace(",", "."))


def format_hours(horas: float) -> str:
    """8.5 -> '08:30'"""
    minutos = int(round(float(horas) * 60))
    h, m = divmod(minutos, 60)
    return f"{h:02d}:{m:02d}"


def resumen_tipo_horas(totals: ShiftTotals) -> list[dict]:
    """Buckets with hours > 0, with their legal percentage and description."""
    rows = []
    for code in BUCKETS:
        horas = getattr(totals, code)
        if horas > 0:
            rows.append({
                "tipo": code,
                "horas": horas,
                "porcentaje": f"{PORCENTAJES_RECARGO[code]}%",
                "descripcion": DESCRIPCIONES_RECARGO[code],
            })
    return rows


def recargos_to_dataframe(summary: PeriodSummary, holiday_set: HolidaySet | None = None) -> pd.DataFrame:
    rows = []
    for r in summary.rows:
        s = r.shift
        t = r.totals or ShiftTotals()
        try:
            dia_semana = DIAS_SEMANA[day_of_week(s.day, s.month, s.year)]
            domingo = is_sunday(s.day, s.month, s.year)
            festivo = is_holiday(s.day, s.month, s.year, holiday_set)
        except ValueError:
            dia_semana, domingo, festivo = "", False, False
        row = {
            "Día": s.day,
            "Día semana": dia_semana,
            "Inicio": format_hours(s.start_hour) if r.is_valid else str(s.start_hour),
            "Fin": format_hours(s.end_hour % 24) if r.is_valid else str(s.end_hour),
            "Total": t.total_hours,
        }
        row.update({code: getattr(t, code) for code in BUCKETS})
        row.update({"Domingo": domingo, "Festivo": festivo, "Error": r.error or ""})
        rows.append(row)
    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values(["Día"]).reset_index(drop=True)
    return df


def _celda_vacia(valor) -> bool:
    return valor is None or pd.isna(valor) or not str(valor).strip()


def filas_a_turnos(df: pd.DataFrame, month: int, year: int) -> tuple[list[WorkShift], list[str]]:
    """Parses editor rows; incomplete rows are skipped, unparseable ones reported."""
    turnos, avisos = [], []
    for idx, row in df.iterrows():
        dia, ini, fin = row.get("Día"), row.get("Inicio"), row.get("Fin")
        if _celda_vacia(dia) or _celda_vacia(ini) or _celda_vacia(fin):
            continue
        try:
            turnos.append(WorkShift(int(dia), month, year, parse_hour(ini), parse_hour(fin)))
        except ValueError:
            avisos.append(f"Fila {idx + 1}: hora inválida ({ini} - {fin}).")
    return turnos, avisos
