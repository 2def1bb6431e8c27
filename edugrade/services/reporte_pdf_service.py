"""Servicio de generación del boletín de calificaciones en PDF con reportlab."""
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from edugrade.schemas.calificaciones import NotasPeriodo
from edugrade.schemas.estudiante import PanelEstudianteResponse

# ── Colores ───────────────────────────────────────────────────────────
INDIGO = colors.HexColor("#3730A3")
RED = colors.HexColor("#EF4444")
GREEN = colors.HexColor("#22C55E")
BLUE = colors.HexColor("#3B82F6")
GRAY = colors.HexColor("#6B7280")
GRAY_LIGHT = colors.HexColor("#F3F4F6")

ESTILO_COLORES = {
    "green": GREEN,
    "blue": BLUE,
    "red": RED,
}

# ── Márgenes y medidas de página ──────────────────────────────────────
_LEFT_MARGIN = 0.6 * inch
_RIGHT_MARGIN = 0.6 * inch
_BOTTOM_MARGIN = 0.5 * inch
# topMargin alto para dejar espacio al header dibujado en canvas
_TOP_MARGIN = 1.4 * inch


# ── Canvas: header en cada página ────────────────────────────────────

def _make_page_callback(titulo_reporte: str):
    """Retorna una función que dibuja el header y el número de página."""

    def _dibujar_pagina(canvas, doc):
        canvas.saveState()

        page_width, page_height = letter
        left_x = _LEFT_MARGIN
        right_x = page_width - _RIGHT_MARGIN
        marca_y = page_height - 0.6 * inch

        canvas.setFont("Helvetica-Bold", 9)
        canvas.setFillColor(INDIGO)
        canvas.drawRightString(right_x, marca_y, "EDUGRADE · GESTIÓN DE CALIFICACIONES")

        sep_y = marca_y - 10
        canvas.setStrokeColor(INDIGO)
        canvas.setLineWidth(1.5)
        canvas.line(left_x, sep_y, right_x, sep_y)

        canvas.setFont("Helvetica-Bold", 14)
        canvas.drawCentredString(page_width / 2, sep_y - 22, titulo_reporte)

        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(GRAY)
        canvas.drawRightString(right_x, 0.3 * inch, f"Página {doc.page}")

        canvas.restoreState()

    return _dibujar_pagina


# ── Elementos de encabezado ───────────────────────────────────────────

def _encabezado(subtitulo: str = "", usuario_nombre: str = "") -> list:
    estilos = getSampleStyleSheet()
    elementos = []

    estilo_meta = ParagraphStyle(
        "MetaReporte",
        parent=estilos["Normal"],
        fontSize=9,
        leading=14,
        textColor=GRAY,
        spaceAfter=3,
    )
    if subtitulo:
        elementos.append(Paragraph(subtitulo, estilo_meta))
    fecha = datetime.now().strftime("%d/%m/%Y %H:%M")
    elementos.append(Paragraph(f"Generado: {fecha}", estilo_meta))
    if usuario_nombre:
        elementos.append(Paragraph(f"Generado por: {escape(usuario_nombre)}", estilo_meta))
    elementos.append(Spacer(1, 0.2 * inch))

    return elementos


# ── Helpers de tablas y secciones ────────────────────────────────────

def _tabla(headers: list[str], rows: list[list], col_widths=None, estilos_extra=None) -> Table:
    """Crea una tabla con el estilo del boletín."""
    data = [headers] + rows
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), INDIGO),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 7),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), 7),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#D1D5DB")),
        *[
            ("BACKGROUND", (0, i), (-1, i), GRAY_LIGHT)
            for i in range(2, len(data), 2)
        ],
        ("ALIGN", (1, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        *(estilos_extra or []),
    ]))
    return table


def _seccion_titulo(texto: str) -> Paragraph:
    estilo = ParagraphStyle(
        "SeccionTitulo",
        fontSize=12,
        textColor=INDIGO,
        fontName="Helvetica-Bold",
        spaceBefore=6,
        spaceAfter=8,
    )
    return Paragraph(texto, estilo)


def _nuevo_doc(buf: BytesIO) -> SimpleDocTemplate:
    return SimpleDocTemplate(
        buf,
        pagesize=letter,
        topMargin=_TOP_MARGIN,
        bottomMargin=_BOTTOM_MARGIN,
        leftMargin=_LEFT_MARGIN,
        rightMargin=_RIGHT_MARGIN,
    )


def _celda(valor: float | None) -> str:
    return "-" if valor is None else f"{valor:g}"


def _fila_periodo(periodo: str, notas: NotasPeriodo, resumen) -> list:
    return [
        periodo,
        *[_celda(v) for v in notas.tasks],
        *[_celda(v) for v in notas.exams],
        *[_celda(v) for v in notas.presentations],
        f"{resumen.nota_final:.1f}",
        resumen.estado.status,
    ]


_ENCABEZADOS_PERIODO = [
    "Período",
    "T1", "T2", "T3", "T4",
    "E1", "E2", "E3",
    "X1", "X2", "X3",
    "Final", "Estado",
]


# ═════════════════════════════════════════════════════════════════════
# Boletín
# ═════════════════════════════════════════════════════════════════════

def generar_boletin(panel: PanelEstudianteResponse, usuario_nombre: str = "") -> bytes:
    """Boletín del estudiante: por materia y año, las 10 notas de cada período, nota final y estado."""
    titulo = f"Boletín de Calificaciones: {panel.nombre_completo}"
    subtitulo = f"Usuario: {escape(panel.usuario)}"
    if panel.profesor:
        subtitulo += f" · Profesor: {escape(panel.profesor)}"

    buf = BytesIO()
    doc = _nuevo_doc(buf)
    page_cb = _make_page_callback(titulo)
    elementos = _encabezado(subtitulo, usuario_nombre)
    styles = getSampleStyleSheet()

    if not panel.materias:
        elementos.append(Paragraph("Sin materias asignadas.", styles["Normal"]))

    for materia in panel.materias:
        for anio in materia.anios:
            filas = []
            estilos_estado = []
            for i, periodo in enumerate(anio.periodos, start=1):
                filas.append(_fila_periodo(periodo.periodo, periodo.notas, periodo.resumen))
                color = ESTILO_COLORES.get(periodo.resumen.estado.estilo, GRAY)
                estilos_estado.append(("TEXTCOLOR", (-1, i), (-1, i), color))
            elementos.append(KeepTogether([
                _seccion_titulo(f"{escape(materia.nombre)} · {anio.anio}"),
                _tabla(_ENCABEZADOS_PERIODO, filas, estilos_extra=estilos_estado),
            ]))
            elementos.append(Spacer(1, 0.15 * inch))

    leyenda = ParagraphStyle("Leyenda", parent=styles["Normal"], fontSize=7, textColor=GRAY)
    elementos.append(Paragraph(
        "T: tareas (40 %) · E: exámenes (40 %) · X: exposiciones (20 %). "
        "Las casillas vacías no cuentan en el promedio.",
        leyenda,
    ))

    doc.build(elementos, onFirstPage=page_cb, onLaterPages=page_cb)
    return buf.getvalue()
