# tests/test_calificaciones.py

import pytest

from edugrade.schemas.calificaciones import NotasPeriodo
from edugrade.services.calificaciones import (
    a_numero,
    estado_nota,
    nota_final,
    promedio,
    redondear_nota,
    resumen_periodo,
)


def test_promedio_ignores_empty_slots():
    assert promedio([8, None, 6, ""]) == 7
    assert promedio(["9", " ", None]) == 9


def test_promedio_of_empty_slots_is_zero():
    assert promedio([None, None, None, None]) == 0
    assert promedio([]) == 0


def test_a_numero_rejects_non_numeric_values():
    assert a_numero("abc") is None
    assert a_numero(True) is None
    assert a_numero("7.5") == 7.5
    assert a_numero(0) == 0


def test_nota_final_extremes():
    assert nota_final(10, 10, 10) == pytest.approx(10)
    assert nota_final(0, 0, 0) == 0


def test_nota_final_weights():
    assert nota_final(8, 6, 10) == pytest.approx(7.6)


def test_redondear_nota():
    assert redondear_nota(7.6000000001) == 7.6
    assert redondear_nota(8.96) == 9.0


@pytest.mark.parametrize(
    "nota, status, estilo",
    [
        (10, "Excelente", "green"),
        (9, "Excelente", "green"),
        (8.99, "Aprobado", "blue"),
        (6, "Aprobado", "blue"),
        (5.99, "Reprobado", "red"),
        (0, "Reprobado", "red"),
    ],
)
def test_estado_nota_bands(nota, status, estilo):
    estado = estado_nota(nota, umbral=6.0)
    assert estado.status == status
    assert estado.estilo == estilo


@pytest.mark.parametrize(
    "nota, status, aprobado",
    [
        (9.2, "Reprobado", False),
        (9.49, "Reprobado", False),
        (9.5, "Excelente", True),
        (10, "Excelente", True),
    ],
)
def test_estado_nota_threshold_above_excellent_band(nota, status, aprobado):
    estado = estado_nota(nota, umbral=9.5)
    assert estado.status == status
    assert estado.aprobado is aprobado


def test_estado_nota_uses_configured_threshold(mocker):
    mocker.patch("edugrade.services.calificaciones.settings.umbral_aprobacion", 7.0)
    assert estado_nota(6.5).status == "Reprobado"
    assert estado_nota(7.0).status == "Aprobado"


def test_resumen_periodo_empty_period_fails():
    resumen = resumen_periodo(NotasPeriodo())
    assert resumen.nota_final == 0
    assert resumen.estado.status == "Reprobado"
    assert resumen.estado.aprobado is False


def test_resumen_periodo_partial_grades():
    notas = NotasPeriodo(
        tasks=(8, 8, None, None),
        exams=(6, None, None),
        presentations=(10, 10, 10),
    )
    resumen = resumen_periodo(notas)
    assert resumen.promedio_tareas == 8
    assert resumen.promedio_examenes == 6
    assert resumen.promedio_exposiciones == 10
    assert resumen.nota_final == 7.6
    assert resumen.estado.status == "Aprobado"


def test_resumen_periodo_status_uses_unrounded_grade():
    # 8.96 se muestra como 9.0 pero no alcanza "Excelente"
    notas = NotasPeriodo(
        tasks=(9, 9, 9, 9),
        exams=(9, 9, 9),
        presentations=(8.8, 8.8, 8.8),
    )
    resumen = resumen_periodo(notas)
    assert resumen.nota_final == 9.0
    assert resumen.estado.status == "Aprobado"
