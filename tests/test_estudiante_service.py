# tests/test_estudiante_service.py

import pytest

from edugrade.core.errores import ContrasenaDebil, IdentidadDuplicada, NoEncontrado
from edugrade.schemas.estudiante import EstudianteCreate
from edugrade.services.registro_academico import PERIODOS, anio_actual

NOTAS = {
    "tasks": [10, 9.5, 8, 7],
    "exams": [6, 5, 4.5],
    "presentations": [3, 2, 1],
}


async def _profesor(proveedor, email="profe@edugrade.edu"):
    return await proveedor.registrar_profesor("Marta Díaz", email, "secreta1")


def _datos(usuario="ana.torres", materias=("Historia", "Matemáticas"), contrasena="alumno1"):
    return EstudianteCreate(
        nombre="Ana Torres",
        usuario=usuario,
        contrasena=contrasena,
        materias=list(materias),
    )


@pytest.mark.asyncio
async def test_register_student_with_initial_subjects(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)

    estudiante = await estudiante_service.registrar(profesor.id, _datos())

    assert estudiante.profesor_id == profesor.id
    assert [m.name for m in estudiante.materias] == ["Historia", "Matemáticas"]
    for materia in estudiante.materias:
        assert list(materia.years) == [anio_actual()]
        assert list(materia.years[anio_actual()]) == list(PERIODOS)


@pytest.mark.asyncio
async def test_student_can_log_in_with_username(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    await estudiante_service.registrar(profesor.id, _datos())

    cuenta = await proveedor.autenticar("ana.torres", "alumno1")

    assert cuenta.rol.value == "student"
    assert cuenta.nombre == "Ana Torres"


@pytest.mark.asyncio
async def test_grades_round_trip(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    estudiante = await estudiante_service.registrar(profesor.id, _datos())

    await estudiante_service.guardar_notas(
        profesor.id, estudiante.id, "Historia", anio_actual(), "Periodo 3", NOTAS
    )
    leidas = await estudiante_service.notas_periodo(
        profesor.id, estudiante.id, "Historia", anio_actual(), "Periodo 3"
    )

    assert list(leidas.notas.tasks) == [10, 9.5, 8, 7]
    assert list(leidas.notas.exams) == [6, 5, 4.5]
    assert list(leidas.notas.presentations) == [3, 2, 1]
    assert leidas.resumen.nota_final == pytest.approx(5.9)


@pytest.mark.asyncio
async def test_other_teacher_cannot_read_student(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    otro = await _profesor(proveedor, email="otro@edugrade.edu")
    estudiante = await estudiante_service.registrar(profesor.id, _datos())

    with pytest.raises(NoEncontrado):
        await estudiante_service.obtener_del_profesor(otro.id, estudiante.id)
    assert await estudiante_service.listar(otro.id) == []


@pytest.mark.asyncio
async def test_duplicate_username_is_rejected(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    await estudiante_service.registrar(profesor.id, _datos())

    with pytest.raises(IdentidadDuplicada):
        await estudiante_service.registrar(profesor.id, _datos(materias=["Arte"]))


@pytest.mark.asyncio
async def test_weak_password_is_rejected(estudiante_service, proveedor, repositorio):
    profesor = await _profesor(proveedor)

    with pytest.raises(ContrasenaDebil):
        await estudiante_service.registrar(profesor.id, _datos(contrasena="123"))
    assert await repositorio.listar_estudiantes(profesor.id) == []


@pytest.mark.asyncio
async def test_teacher_overview(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    ana = await estudiante_service.registrar(profesor.id, _datos())
    await estudiante_service.registrar(
        profesor.id, _datos(usuario="luis.romero", materias=["Matemáticas", "Ciencias"])
    )
    await estudiante_service.guardar_notas(
        profesor.id, ana.id, "Historia", anio_actual(), "Periodo 1", NOTAS
    )

    resumen = await estudiante_service.resumen_profesor(profesor.id)

    assert resumen.total_estudiantes == 2
    assert resumen.total_materias == 3
    assert resumen.estudiantes_con_calificaciones == 1


@pytest.mark.asyncio
async def test_student_dashboard(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    estudiante = await estudiante_service.registrar(profesor.id, _datos(materias=["Historia"]))
    await estudiante_service.guardar_notas(
        profesor.id, estudiante.id, "Historia", anio_actual(), "Periodo 1",
        {"tasks": [10, 10, 10, 10], "exams": [10, 10, 10], "presentations": [10, 10, 10]},
    )

    panel = await estudiante_service.panel_estudiante(estudiante.cuenta_id)

    assert panel.profesor == "Marta Díaz"
    periodo = panel.materias[0].anios[0].periodos[0]
    assert periodo.periodo == "Periodo 1"
    assert periodo.resumen.nota_final == 10
    assert periodo.resumen.estado.status == "Excelente"


@pytest.mark.asyncio
async def test_legacy_record_is_backfilled_on_read(estudiante_service, proveedor, repositorio):
    profesor = await _profesor(proveedor)
    vacio = {"tasks": ["", "", "", ""], "exams": ["", "", ""], "presentations": ["", "", ""]}
    repositorio.guardar_documento({
        "id": "legado-1",
        "nombre_completo": "Pedro Legado",
        "usuario": "pedro.legado",
        "profesor_id": profesor.id,
        "materias": [
            {"name": "Historia", "years": {"2024": {"Periodo 1": vacio, "Periodo 2": vacio, "Periodo 3": vacio}}}
        ],
    })

    estudiante = await estudiante_service.obtener_del_profesor(profesor.id, "legado-1")

    assert list(estudiante.materias[0].years["2024"]) == list(PERIODOS)


@pytest.mark.asyncio
async def test_students_are_listed_by_name(estudiante_service, proveedor):
    profesor = await _profesor(proveedor)
    for nombre, usuario in [("Zoe Ruiz", "zoe"), ("Ana Torres", "ana"), ("Luis Romero", "luis")]:
        await estudiante_service.registrar(
            profesor.id,
            EstudianteCreate(nombre=nombre, usuario=usuario, contrasena="alumno1", materias=["Arte"]),
        )

    estudiantes = await estudiante_service.listar(profesor.id)

    assert [e.nombre_completo for e in estudiantes] == ["Ana Torres", "Luis Romero", "Zoe Ruiz"]
