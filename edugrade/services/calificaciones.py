"""Cálculo de promedios, nota final ponderada y estado de aprobación.

Funciones puras: no validan rango (eso ocurre al registrar las notas) y no
lanzan excepciones. Las casillas vacías (None o "") no cuentan ni en la suma
ni en la cantidad.
"""
from collections.abc import Iterable

from edugrade.core.config import settings
from edugrade.schemas.calificaciones import EstadoNota, NotasPeriodo, ResumenPeriodo

PESO_TAREAS = 0.4
PESO_EXAMENES = 0.4
PESO_EXPOSICIONES = 0.2

NOTA_EXCELENTE = 9.0


def a_numero(valor) -> float | None:
    """Convierte una casilla a número; None si está vacía o no es numérica."""
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, str):
        valor = valor.strip()
        if not valor:
            return None
    try:
        return float(valor)
    except (TypeError, ValueError):
        return None


def promedio(valores: Iterable[float | str | None]) -> float:
    """Media aritmética de las casillas con valor; 0 si todas están vacías."""
    numeros = [n for n in (a_numero(v) for v in valores) if n is not None]
    if not numeros:
        return 0
    return sum(numeros) / len(numeros)


def nota_final(promedio_tareas: float, promedio_examenes: float, promedio_exposiciones: float) -> float:
    """Tareas 40 %, exámenes 40 %, exposiciones 20 %. Sin redondeo."""
    return (
        PESO_TAREAS * promedio_tareas
        + PESO_EXAMENES * promedio_examenes
        + PESO_EXPOSICIONES * promedio_exposiciones
    )


def redondear_nota(nota: float) -> float:
    """Redondeo a un decimal, solo para mostrar."""
    return round(nota, 1)


def estado_nota(nota: float, umbral: float | None = None) -> EstadoNota:
    """Etiqueta de la nota final. "Excelente" exige además haber aprobado con el umbral configurado."""
    if umbral is None:
        umbral = settings.umbral_aprobacion
    if nota < umbral:
        return EstadoNota(status="Reprobado", estilo="red", aprobado=False)
    if nota >= NOTA_EXCELENTE:
        return EstadoNota(status="Excelente", estilo="green", aprobado=True)
    return EstadoNota(status="Aprobado", estilo="blue", aprobado=True)


def resumen_periodo(notas: NotasPeriodo, umbral: float | None = None) -> ResumenPeriodo:
    """Promedios por categoría, nota final y estado de un período."""
    tareas = promedio(notas.tasks)
    examenes = promedio(notas.exams)
    exposiciones = promedio(notas.presentations)
    final = nota_final(tareas, examenes, exposiciones)
    return ResumenPeriodo(
        promedio_tareas=tareas,
        promedio_examenes=examenes,
        promedio_exposiciones=exposiciones,
        nota_final=redondear_nota(final),
        # El estado se decide con la nota sin redondear
        estado=estado_nota(final, umbral),
    )
