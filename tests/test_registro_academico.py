# tests/test_registro_academico.py

import pytest

from edugrade.core.errores import ErrorValidacion, NoEncontrado
from edugrade.schemas.calificaciones import NotasPeriodo
from edugrade.services import registro_academico as ra

NOTAS = {
    "tasks": [10, 9, 8, 7],
    "exams": [6, 5, 4],
    "presentations": [3, 2, 1],
}


@pytest.fixture
def materias():
    return [ra.nueva_materia("Historia", 2025), ra.nueva_materia("Matemáticas", 2025)]


def test_new_subject_has_four_empty_periods():
    materia = ra.nueva_materia("Historia", 2025)

    assert materia.name == "Historia"
    assert list(materia.years) == ["2025"]
    periodos = materia.years["2025"]
    assert list(periodos) == list(ra.PERIODOS)
    for notas in periodos.values():
        assert len(notas.tasks) == 4
        assert len(notas.exams) == 3
        assert len(notas.presentations) == 3
        assert all(valor is None for valor in notas.casillas())


def test_new_subject_defaults_to_current_year():
    materia = ra.nueva_materia("Arte")
    assert list(materia.years) == [ra.anio_actual()]


def test_assign_duplicate_subject_is_rejected(materias):
    with pytest.raises(ErrorValidacion):
        ra.asignar_materia(materias, "Historia")
    assert ra.nombres_materias(materias) == ["Historia", "Matemáticas"]


def test_assign_empty_subject_is_rejected(materias):
    with pytest.raises(ErrorValidacion):
        ra.asignar_materia(materias, "   ")


def test_assign_subject_returns_new_collection(materias):
    nuevas = ra.asignar_materia(materias, "  Ciencias ")

    assert ra.nombres_materias(nuevas) == ["Historia", "Matemáticas", "Ciencias"]
    assert len(materias) == 2


def test_subject_names_are_case_sensitive(materias):
    nuevas = ra.asignar_materia(materias, "historia")
    assert "historia" in ra.nombres_materias(nuevas)


def test_remove_subject(materias):
    nuevas = ra.eliminar_materia(materias, "Historia")
    assert ra.nombres_materias(nuevas) == ["Matemáticas"]
    assert len(materias) == 2


def test_remove_missing_subject(materias):
    with pytest.raises(NoEncontrado):
        ra.eliminar_materia(materias, "Química")


def test_register_grades_does_not_mutate_input(materias):
    nuevas = ra.registrar_notas(materias, "Historia", "2025", "Periodo 2", NOTAS)

    guardadas = ra.obtener_notas(nuevas, "Historia", "2025", "Periodo 2")
    assert list(guardadas.tasks) == [10, 9, 8, 7]
    assert list(guardadas.exams) == [6, 5, 4]
    assert list(guardadas.presentations) == [3, 2, 1]

    original = ra.obtener_notas(materias, "Historia", "2025", "Periodo 2")
    assert all(valor is None for valor in original.casillas())
    # Las demás materias y períodos no cambian
    assert nuevas[1] == materias[1]
    assert nuevas[0].years["2025"]["Periodo 1"] == materias[0].years["2025"]["Periodo 1"]


def test_register_grades_creates_missing_year(materias):
    nuevas = ra.registrar_notas(materias, "Historia", 2026, "Periodo 1", NOTAS)

    assert set(nuevas[0].years) == {"2025", "2026"}
    assert list(nuevas[0].years["2026"]) == list(ra.PERIODOS)


def test_register_grades_rejects_out_of_range(materias):
    notas = {**NOTAS, "exams": [11, 5, 4]}
    with pytest.raises(ErrorValidacion):
        ra.registrar_notas(materias, "Historia", "2025", "Periodo 1", notas)


def test_register_grades_rejects_wrong_slot_count(materias):
    notas = {**NOTAS, "tasks": [10, 9]}
    with pytest.raises(ErrorValidacion):
        ra.registrar_notas(materias, "Historia", "2025", "Periodo 1", notas)


def test_register_grades_rejects_unknown_period(materias):
    with pytest.raises(ErrorValidacion):
        ra.registrar_notas(materias, "Historia", "2025", "Periodo 5", NOTAS)


def test_read_grades_of_missing_year_is_empty(materias):
    notas = ra.obtener_notas(materias, "Historia", "1999", "Periodo 3")
    assert notas == NotasPeriodo()


def test_legacy_record_gets_period_four():
    legado = {
        "name": "Historia",
        "years": {
            "2024": {
                "Periodo 1": {"tasks": ["9", "", "", ""], "exams": ["", "", ""], "presentations": ["", "", ""]},
                "Periodo 2": {"tasks": ["", "", "", ""], "exams": ["", "", ""], "presentations": ["", "", ""]},
                "Periodo 3": {"tasks": ["", "", "", ""], "exams": ["", "", ""], "presentations": ["", "", ""]},
            }
        },
    }
    materia = ra.normalizar_materia(legado)

    assert list(materia.years["2024"]) == list(ra.PERIODOS)
    assert materia.years["2024"]["Periodo 1"].tasks == (9.0, None, None, None)
    assert all(valor is None for valor in materia.years["2024"]["Periodo 4"].casillas())


def test_document_form_uses_null_for_empty_slots():
    documento = ra.materias_a_documento([ra.nueva_materia("Arte", 2025)])
    periodo = documento[0]["years"]["2025"]["Periodo 1"]
    assert periodo == {
        "tasks": [None, None, None, None],
        "exams": [None, None, None],
        "presentations": [None, None, None],
    }


def test_has_grades(materias):
    assert ra.tiene_calificaciones(materias) is False
    nuevas = ra.registrar_notas(materias, "Matemáticas", "2025", "Periodo 4", NOTAS)
    assert ra.tiene_calificaciones(nuevas) is True
