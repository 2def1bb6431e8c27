"""Reglas del documento de materias de un estudiante.

Todas las operaciones de actualización devuelven una colección nueva y nunca
modifican la recibida. El resultado se persiste completo con
`RepositorioEstudiantes.actualizar_materias` (reemplazo total).
"""
import logging
from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import ValidationError

from edugrade.core.errores import ErrorValidacion, NoEncontrado
from edugrade.schemas.calificaciones import (
    CASILLAS_EXAMENES,
    CASILLAS_EXPOSICIONES,
    CASILLAS_TAREAS,
    MateriaRegistro,
    NotasPeriodo,
)
from edugrade.services.calificaciones import a_numero

logger = logging.getLogger(__name__)

PERIODOS = ("Periodo 1", "Periodo 2", "Periodo 3", "Periodo 4")


def anio_actual() -> str:
    return str(date.today().year)


def etiqueta_anio(anio: int | str | None) -> str:
    """Año como etiqueta de texto (las claves del documento JSON son cadenas)."""
    if anio is None:
        return anio_actual()
    try:
        return str(int(str(anio).strip()))
    except ValueError:
        raise ErrorValidacion(f"Año inválido: '{anio}'.") from None


def validar_periodo(periodo: str) -> str:
    if periodo not in PERIODOS:
        raise ErrorValidacion(
            f"Período inválido: '{periodo}'. Valores permitidos: {', '.join(PERIODOS)}."
        )
    return periodo


def periodos_vacios() -> dict[str, NotasPeriodo]:
    """Los cuatro períodos con todas las casillas vacías."""
    return {periodo: NotasPeriodo() for periodo in PERIODOS}


def nueva_materia(nombre: str, anio: int | str | None = None) -> MateriaRegistro:
    """Materia con el año (por defecto el actual) y sus cuatro períodos vacíos."""
    return MateriaRegistro(name=nombre, years={etiqueta_anio(anio): periodos_vacios()})


# ── Normalización de registros guardados ─────────────────────────────


def _casillas(valores, cantidad: int) -> tuple:
    valores = list(valores or [])[:cantidad]
    valores += [None] * (cantidad - len(valores))
    resultado = []
    for valor in valores:
        numero = a_numero(valor)
        if numero is not None and not 0 <= numero <= 10:
            logger.warning("Nota fuera de rango descartada al normalizar: %r", valor)
            numero = None
        resultado.append(numero)
    return tuple(resultado)


def normalizar_periodo(datos: dict | NotasPeriodo | None) -> NotasPeriodo:
    """Convierte un período guardado (casillas "" o numéricas en texto) a `NotasPeriodo`."""
    if isinstance(datos, NotasPeriodo):
        return datos
    datos = datos or {}
    return NotasPeriodo(
        tasks=_casillas(datos.get("tasks"), CASILLAS_TAREAS),
        exams=_casillas(datos.get("exams"), CASILLAS_EXAMENES),
        presentations=_casillas(datos.get("presentations"), CASILLAS_EXPOSICIONES),
    )


def normalizar_materia(datos: dict | MateriaRegistro) -> MateriaRegistro:
    """Completa los períodos que falten en cada año (registros anteriores al Periodo 4)."""
    if isinstance(datos, MateriaRegistro):
        datos = datos.model_dump()
    anios: dict[str, dict[str, NotasPeriodo]] = {}
    for anio, periodos in (datos.get("years") or {}).items():
        periodos = periodos or {}
        faltantes = [p for p in PERIODOS if p not in periodos]
        if faltantes:
            logger.debug(
                "Materia '%s', año %s: completando períodos %s", datos.get("name"), anio, faltantes
            )
        anios[str(anio)] = {p: normalizar_periodo(periodos.get(p)) for p in PERIODOS}
    return MateriaRegistro(name=str(datos.get("name", "")).strip(), years=anios)


def normalizar_materias(datos: Iterable[dict | MateriaRegistro] | None) -> list[MateriaRegistro]:
    return [normalizar_materia(m) for m in (datos or [])]


def materias_a_documento(materias: Iterable[MateriaRegistro]) -> list[dict]:
    """Forma persistida: listas JSON con null en las casillas vacías."""
    return [m.model_dump(mode="json") for m in materias]


# ── Operaciones ──────────────────────────────────────────────────────


def _indice_materia(materias: Sequence[MateriaRegistro], nombre: str) -> int:
    for i, materia in enumerate(materias):
        if materia.name == nombre:
            return i
    raise NoEncontrado(f'La materia "{nombre}" no está asignada a este estudiante.')


def nombres_materias(materias: Iterable[MateriaRegistro]) -> list[str]:
    return [m.name for m in materias]


def asignar_materia(
    materias: Sequence[MateriaRegistro],
    nombre: str,
    anio: int | str | None = None,
) -> list[MateriaRegistro]:
    """Agrega una materia nueva. Rechaza nombres vacíos y duplicados (comparación exacta)."""
    nombre = (nombre or "").strip()
    if not nombre:
        raise ErrorValidacion("Escribe el nombre de la materia.")
    if nombre in nombres_materias(materias):
        raise ErrorValidacion(f'La materia "{nombre}" ya está asignada a este estudiante.')
    return [*materias, nueva_materia(nombre, anio)]


def eliminar_materia(materias: Sequence[MateriaRegistro], nombre: str) -> list[MateriaRegistro]:
    indice = _indice_materia(materias, nombre)
    return [*materias[:indice], *materias[indice + 1:]]


def validar_notas(notas: NotasPeriodo | dict) -> NotasPeriodo:
    if isinstance(notas, NotasPeriodo):
        return notas
    try:
        return NotasPeriodo.model_validate(notas)
    except ValidationError:
        raise ErrorValidacion(
            "Las notas deben estar entre 0 y 10: 4 tareas, 3 exámenes y 3 exposiciones."
        ) from None


def registrar_notas(
    materias: Sequence[MateriaRegistro],
    nombre: str,
    anio: int | str,
    periodo: str,
    notas: NotasPeriodo | dict,
) -> list[MateriaRegistro]:
    """Reemplaza las notas de un período. Si el año no existe, se crea con sus cuatro períodos."""
    validar_periodo(periodo)
    etiqueta = etiqueta_anio(anio)
    notas = validar_notas(notas)
    indice = _indice_materia(materias, nombre)

    materia = materias[indice]
    periodos = {**periodos_vacios(), **materia.years.get(etiqueta, {})}
    periodos[periodo] = notas
    actualizada = materia.model_copy(update={"years": {**materia.years, etiqueta: periodos}})
    return [*materias[:indice], actualizada, *materias[indice + 1:]]


def obtener_notas(
    materias: Sequence[MateriaRegistro],
    nombre: str,
    anio: int | str,
    periodo: str,
) -> NotasPeriodo:
    """Notas de un período; casillas vacías si el año aún no existe."""
    validar_periodo(periodo)
    materia = materias[_indice_materia(materias, nombre)]
    return materia.years.get(etiqueta_anio(anio), {}).get(periodo, NotasPeriodo())


def tiene_calificaciones(materias: Iterable[MateriaRegistro]) -> bool:
    """True si alguna casilla de cualquier período tiene valor."""
    return any(
        valor is not None
        for materia in materias
        for periodos in materia.years.values()
        for notas in periodos.values()
        for valor in notas.casillas()
    )
