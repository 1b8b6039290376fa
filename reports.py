# reports.py
from __future__ import annotations
import io
import logging

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from domain import BUCKETS, PORCENTAJES_RECARGO, ShiftTotals

logger = logging.getLogger(__name__)

MESES = ["Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio", "Julio",
         "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre"]

COLUMNAS_PDF = ["Día", "Día semana", "Inicio", "Fin", "Total", *BUCKETS]


def mes_en_letras(month: int, year: int) -> str:
    return f"{MESES[month - 1]} {year}"


def linea_totales(totals: ShiftTotals) -> str:
    partes = [f"{code} ({PORCENTAJES_RECARGO[code]}%): {getattr(totals, code):.1f}" for code in BUCKETS]
    return " · ".join(partes)


def dataframe_a_pdf(df: pd.DataFrame, titulo: str, resumen: list[str] | None = None) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(A4), topMargin=24, bottomMargin=24, leftMargin=24, rightMargin=24)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(name="TitleCentered", parent=styles["Title"], alignment=TA_CENTER)
    resumen_style = ParagraphStyle(
        name="Resumen", parent=styles["Normal"], alignment=TA_CENTER,
        textColor=colors.black, fontSize=10, leading=13, spaceBefore=2, spaceAfter=2
    )
    story = [Paragraph(titulo, title_style), Spacer(1, 8)]
    if df.empty:
        story.append(Paragraph("Sin datos para mostrar.", styles["Normal"]))
    else:
        data = [list(df.columns)] + df.astype(str).values.tolist()
        table = Table(data, repeatRows=1, hAlign="CENTER")
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F5F5F7")),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#E0E0E0")),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        story.append(table)
    if resumen:
        story.append(Spacer(1, 12))
        box = Table([[Paragraph(linea, resumen_style)] for linea in resumen],
                    colWidths=[min(620, 0.8 * doc.width)], hAlign="CENTER")
        box.setStyle(TableStyle([
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("BOX", (0, 0), (-1, -1), 0.6, colors.HexColor("#C7CCD6")),
            ("INNERPADDING", (0, 0), (-1, -1), 8),
        ]))
        story.append(box)

    def draw_page_border(canvas, doc_obj):
        canvas.saveState()
        w, h = doc_obj.pagesize
        canvas.setStrokeColor(colors.HexColor("#C7CCD6"))
        canvas.setLineWidth(0.8)
        margin = 12
        canvas.rect(margin, margin, w - 2*margin, h - 2*margin)
        canvas.restoreState()

    doc.build(story, onFirstPage=draw_page_border, onLaterPages=draw_page_border)
    return buf.getvalue()


def generar_pdf_periodo(
    df: pd.DataFrame,
    totals: ShiftTotals,
    month: int,
    year: int,
    encabezado: str = "",
) -> bytes:
    """Monthly recargos report: valid rows only, plus a totals box."""
    if not df.empty:
        df = df[df["Error"] == ""][COLUMNAS_PDF]
    titulo = f"Recargos conductores — {mes_en_letras(month, year)}"
    if encabezado:
        titulo += f"<br/>{encabezado}"
    resumen = [f"Total horas: {totals.total_hours:.1f}", linea_totales(totals)]
    pdf = dataframe_a_pdf(df, titulo, resumen)
    logger.info("PDF %02d/%d generado (%d bytes)", month, year, len(pdf))
    return pdf
