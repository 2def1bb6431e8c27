"""Operaciones del panel de profesor y del panel de estudiante."""
import logging

from edugrade.core.errores import NoEncontrado
from edugrade.models.cuenta import nuevo_id
from edugrade.schemas.calificaciones import MateriaRegistro, NotasPeriodo, NotasPeriodoResponse
from edugrade.schemas.estudiante import (
    EstudianteCreate,
    EstudianteItem,
    EstudianteRegistro,
    PanelAnio,
    PanelEstudianteResponse,
    PanelMateria,
    PanelPeriodo,
    ResumenProfesorResponse,
)
from edugrade.services import registro_academico
from edugrade.services.calificaciones import resumen_periodo
from edugrade.services.repositorios import (
    ProveedorIdentidad,
    RepositorioEstudiantes,
    validar_contrasena,
)

logger = logging.getLogger(__name__)


class EstudianteService:
    def __init__(self, repositorio: RepositorioEstudiantes, proveedor: ProveedorIdentidad):
        self.repositorio = repositorio
        self.proveedor = proveedor

    # ── Profesor ─────────────────────────────────────────────────────

    async def listar(self, profesor_id: str) -> list[EstudianteItem]:
        estudiantes = await self.repositorio.listar_estudiantes(profesor_id)
        return [
            EstudianteItem(
                id=e.id,
                nombre_completo=e.nombre_completo,
                usuario=e.usuario,
                materias=registro_academico.nombres_materias(e.materias),
                tiene_calificaciones=registro_academico.tiene_calificaciones(e.materias),
            )
            for e in estudiantes
        ]

    async def resumen_profesor(self, profesor_id: str) -> ResumenProfesorResponse:
        estudiantes = await self.repositorio.listar_estudiantes(profesor_id)
        materias = {m.name for e in estudiantes for m in e.materias}
        return ResumenProfesorResponse(
            total_estudiantes=len(estudiantes),
            total_materias=len(materias),
            estudiantes_con_calificaciones=sum(
                1 for e in estudiantes if registro_academico.tiene_calificaciones(e.materias)
            ),
        )

    async def obtener_del_profesor(self, profesor_id: str, estudiante_id: str) -> EstudianteRegistro:
        """Registro del estudiante; los de otro profesor se tratan como inexistentes."""
        estudiante = await self.repositorio.obtener_estudiante(estudiante_id)
        if estudiante is None or estudiante.profesor_id != profesor_id:
            raise NoEncontrado("Estudiante no encontrado.")
        return estudiante

    async def registrar(self, profesor_id: str, datos: EstudianteCreate) -> EstudianteRegistro:
        """Crea la cuenta de acceso y el registro con sus materias iniciales."""
        materias: list[MateriaRegistro] = []
        for nombre in datos.materias:
            materias = registro_academico.asignar_materia(materias, nombre)
        validar_contrasena(datos.contrasena)

        cuenta_id = await self.proveedor.crear_cuenta_estudiante(datos.usuario, datos.contrasena)
        estudiante = await self.repositorio.crear_estudiante(
            EstudianteRegistro(
                id=nuevo_id(),
                nombre_completo=datos.nombre,
                usuario=datos.usuario,
                profesor_id=profesor_id,
                cuenta_id=cuenta_id,
                materias=materias,
            )
        )
        logger.info(
            "Estudiante %s registrado por el profesor %s con %d materias",
            estudiante.id, profesor_id, len(materias),
        )
        return estudiante

    async def asignar_materia(
        self, profesor_id: str, estudiante_id: str, nombre: str, anio: int | None = None
    ) -> EstudianteRegistro:
        estudiante = await self.obtener_del_profesor(profesor_id, estudiante_id)
        materias = registro_academico.asignar_materia(estudiante.materias, nombre, anio)
        actualizado = await self.repositorio.actualizar_materias(estudiante_id, materias)
        logger.info("Materia '%s' asignada al estudiante %s", nombre.strip(), estudiante_id)
        return actualizado

    async def eliminar_materia(self, profesor_id: str, estudiante_id: str, nombre: str) -> EstudianteRegistro:
        estudiante = await self.obtener_del_profesor(profesor_id, estudiante_id)
        materias = registro_academico.eliminar_materia(estudiante.materias, nombre)
        actualizado = await self.repositorio.actualizar_materias(estudiante_id, materias)
        logger.info("Materia '%s' eliminada del estudiante %s", nombre, estudiante_id)
        return actualizado

    async def notas_periodo(
        self, profesor_id: str, estudiante_id: str, materia: str, anio: str, periodo: str
    ) -> NotasPeriodoResponse:
        estudiante = await self.obtener_del_profesor(profesor_id, estudiante_id)
        notas = registro_academico.obtener_notas(estudiante.materias, materia, anio, periodo)
        return _notas_response(estudiante_id, materia, anio, periodo, notas)

    async def guardar_notas(
        self,
        profesor_id: str,
        estudiante_id: str,
        materia: str,
        anio: str,
        periodo: str,
        notas: NotasPeriodo | dict,
    ) -> NotasPeriodoResponse:
        estudiante = await self.obtener_del_profesor(profesor_id, estudiante_id)
        materias = registro_academico.registrar_notas(estudiante.materias, materia, anio, periodo, notas)
        actualizado = await self.repositorio.actualizar_materias(estudiante_id, materias)
        logger.info(
            "Notas guardadas: estudiante %s, materia '%s', %s %s", estudiante_id, materia, anio, periodo
        )
        guardadas = registro_academico.obtener_notas(actualizado.materias, materia, anio, periodo)
        return _notas_response(estudiante_id, materia, anio, periodo, guardadas)

    # ── Estudiante ───────────────────────────────────────────────────

    async def registro_de_cuenta(self, cuenta_id: str) -> EstudianteRegistro:
        estudiante = await self.repositorio.obtener_estudiante_por_cuenta(cuenta_id)
        if estudiante is None:
            raise NoEncontrado("No se encontraron tus datos de estudiante.")
        return estudiante

    async def panel_estudiante(self, cuenta_id: str) -> PanelEstudianteResponse:
        estudiante = await self.registro_de_cuenta(cuenta_id)
        profesor = await self.proveedor.nombre_profesor(estudiante.profesor_id)
        return construir_panel(estudiante, profesor)


def _notas_response(
    estudiante_id: str, materia: str, anio: str, periodo: str, notas: NotasPeriodo
) -> NotasPeriodoResponse:
    return NotasPeriodoResponse(
        estudiante_id=estudiante_id,
        materia=materia,
        anio=registro_academico.etiqueta_anio(anio),
        periodo=periodo,
        notas=notas,
        resumen=resumen_periodo(notas),
    )


def construir_panel(estudiante: EstudianteRegistro, profesor: str | None) -> PanelEstudianteResponse:
    """Materias → años (recientes primero) → períodos, con el resumen calculado de cada período."""
    materias = []
    for materia in estudiante.materias:
        anios = [
            PanelAnio(
                anio=anio,
                periodos=[
                    PanelPeriodo(periodo=periodo, notas=notas, resumen=resumen_periodo(notas))
                    for periodo, notas in periodos.items()
                ],
            )
            for anio, periodos in sorted(materia.years.items(), reverse=True)
        ]
        materias.append(PanelMateria(nombre=materia.name, anios=anios))
    return PanelEstudianteResponse(
        id=estudiante.id,
        nombre_completo=estudiante.nombre_completo,
        usuario=estudiante.usuario,
        profesor=profesor,
        materias=materias,
    )
