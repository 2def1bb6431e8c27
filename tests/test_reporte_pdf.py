# tests/test_reporte_pdf.py

from edugrade.schemas.calificaciones import NotasPeriodo
from edugrade.schemas.estudiante import EstudianteRegistro
from edugrade.services.estudiante_service import construir_panel
from edugrade.services.registro_academico import nueva_materia, registrar_notas
from edugrade.services.reporte_pdf_service import _make_page_callback, generar_boletin


def _estudiante(materias):
    return EstudianteRegistro(
        id="e1",
        nombre_completo="Ana <Torres> & Cía",
        usuario="ana.torres",
        profesor_id="p1",
        materias=materias,
    )


def test_report_card_is_pdf():
    materias = registrar_notas(
        [nueva_materia("Historia", 2024), nueva_materia("Matemáticas", 2025)],
        "Historia",
        "2024",
        "Periodo 2",
        NotasPeriodo(tasks=(10, 9, None, 7), exams=(6, 5, 4), presentations=(3, None, 1)),
    )
    panel = construir_panel(_estudiante(materias), "Marta Díaz")

    pdf = generar_boletin(panel, usuario_nombre="Marta Díaz")

    assert pdf.startswith(b"%PDF")


def test_report_card_without_subjects():
    panel = construir_panel(_estudiante([]), None)
    assert generar_boletin(panel).startswith(b"%PDF")


def test_dashboard_orders_years_newest_first():
    materia = nueva_materia("Historia", 2023)
    materias = registrar_notas([materia], "Historia", "2025", "Periodo 1", NotasPeriodo())

    panel = construir_panel(_estudiante(materias), None)

    assert [a.anio for a in panel.materias[0].anios] == ["2025", "2023"]


def test_page_header_draws_brand_title_and_page_number(mocker):
    canvas = mocker.Mock()
    doc = mocker.Mock(page=2)

    _make_page_callback("Boletín de Calificaciones: Ana Torres")(canvas, doc)

    textos = [c.args[2] for c in canvas.drawRightString.call_args_list]
    assert textos == ["EDUGRADE · GESTIÓN DE CALIFICACIONES", "Página 2"]
    canvas.drawCentredString.assert_called_once()
    assert canvas.drawCentredString.call_args.args[2] == "Boletín de Calificaciones: Ana Torres"
    canvas.drawImage.assert_not_called()
