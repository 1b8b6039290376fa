# app.py
# -----------------------------------------------
# 🚚 Recargos de conductores (Streamlit)
# -----------------------------------------------
# Requiere: streamlit, pandas, reportlab
# Los recargos se recalculan en cada edición de la tabla; no se guarda nada en disco.

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo

import pandas as pd
import streamlit as st

from colombian_calendar import colombian_holidays, sundays_of_month
from domain import AÑO_MAX, AÑO_MIN, BUCKETS, DESCRIPCIONES_RECARGO, PORCENTAJES_RECARGO, RecargoError
from reports import generar_pdf_periodo, mes_en_letras
from services import SurchargeCalculator, summarize_period
from utils import filas_a_turnos, recargos_to_dataframe, resumen_tipo_horas

# =========================
# Parámetros globales (sobrescribibles por entorno)
# =========================
TITULO_APP = "Recargos Conductores"
JORNADA_ORDINARIA_H = float(os.getenv("JORNADA_ORDINARIA_H", "8"))
LOG_LEVEL = os.getenv("RECARGOS_LOG_LEVEL", "INFO").upper()
TZ = ZoneInfo(os.getenv("APP_TZ", "America/Bogota"))

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("recargos.app")

calculator = SurchargeCalculator(ordinary_threshold=JORNADA_ORDINARIA_H)


@st.cache_data
def festivos_del_año(year: int):
    return colombian_holidays(year)


def filas_vacias() -> pd.DataFrame:
    return pd.DataFrame({"Día": pd.Series(dtype="Int64"), "Inicio": pd.Series(dtype=str), "Fin": pd.Series(dtype=str)})


# =========================
# Configuración de página
# =========================
st.set_page_config(page_title=TITULO_APP, page_icon="🚚", layout="wide")
st.title(f"🚚 {TITULO_APP}")
st.caption("Registra los días laborales del mes; los recargos se recalculan con cada cambio. "
           f"Jornada ordinaria: {JORNADA_ORDINARIA_H:g} h · Nocturno: 21:00–06:00.")

hoy = datetime.now(TZ).date()
col_mes, col_año = st.columns(2)
mes = col_mes.selectbox("Mes", list(range(1, 13)), index=hoy.month - 1,
                        format_func=lambda m: mes_en_letras(m, hoy.year).split()[0])
año = int(col_año.number_input("Año", min_value=AÑO_MIN, max_value=AÑO_MAX, value=hoy.year, step=1))

festivos = festivos_del_año(año)
festivos_siguiente = festivos_del_año(año + 1) if año < AÑO_MAX else None
dias_festivos = festivos.for_month(mes)
st.caption(
    f"Festivos de {mes_en_letras(mes, año)}: {', '.join(map(str, dias_festivos)) or 'ninguno'} · "
    f"Domingos: {', '.join(map(str, sundays_of_month(mes, año)))}"
)

# =========================
# Datos del recargo
# =========================
st.subheader("📝 Datos del recargo")
c1, c2, c3, c4 = st.columns(4)
conductor = c1.text_input("Conductor")
placa = c2.text_input("Placa")
empresa = c3.text_input("Empresa")
planilla = c4.text_input("No. planilla")

# =========================
# Días laborales (editable)
# =========================
st.subheader("🗓️ Días laborales")
key_filas = f"filas_{año}_{mes:02d}"
if key_filas not in st.session_state:
    st.session_state[key_filas] = filas_vacias()

df_editado = st.data_editor(
    st.session_state[key_filas],
    column_config={
        "Día": st.column_config.NumberColumn(min_value=1, max_value=31, step=1),
        "Inicio": st.column_config.TextColumn(help="HH:MM o decimal (ej. 8:30 / 8.5)"),
        "Fin": st.column_config.TextColumn(help="HH:MM o decimal; menor que inicio = cruza medianoche"),
    },
    num_rows="dynamic",
    use_container_width=True,
    key=f"editor_{key_filas}",
)

turnos, avisos = filas_a_turnos(df_editado, mes, año)
for aviso in avisos:
    st.warning(aviso)

try:
    resumen = summarize_period(turnos, festivos, calculator=calculator, next_year_holidays=festivos_siguiente)
except RecargoError as e:
    logger.error("No se pudo calcular el periodo: %s", e)
    st.error(f"No se pudo calcular el periodo: {e}")
    st.stop()

for r in resumen.invalid_rows:
    st.warning(f"Día {r.shift.day}: {r.error}")

df_recargos = recargos_to_dataframe(resumen, festivos)
if df_recargos.empty:
    st.info("Sin días laborales registrados en este mes.")
else:
    st.dataframe(df_recargos, use_container_width=True, hide_index=True)

# =========================
# Totales del mes
# =========================
st.subheader("📊 Totales del mes")
totales = resumen.totals
cols = st.columns(len(BUCKETS) + 1)
cols[0].metric("Total horas", f"{totales.total_hours:.1f}")
for col, code in zip(cols[1:], BUCKETS):
    col.metric(f"{code} ({PORCENTAJES_RECARGO[code]}%)", f"{getattr(totales, code):.1f}",
               help=DESCRIPCIONES_RECARGO[code])

detalle = resumen_tipo_horas(totales)
if detalle:
    st.table(pd.DataFrame(detalle))

# =========================
# ⬇️ PDF del mes
# =========================
encabezado = " · ".join(x for x in (conductor, placa, empresa, planilla and f"Planilla {planilla}") if x)
pdf_bytes = generar_pdf_periodo(df_recargos, totales, mes, año, encabezado=encabezado)
st.download_button(
    "Descargar PDF del mes",
    data=pdf_bytes,
    file_name=f"recargos_{año}-{mes:02d}.pdf",
    mime="application/pdf",
    disabled=df_recargos.empty,
    use_container_width=True,
)
