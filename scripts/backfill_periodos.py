"""Script de migración: completa los períodos faltantes (p. ej. "Periodo 4")
en los documentos de materias guardados antes de que existiera.

La lectura ya los completa al vuelo; este script los deja persistidos.
"""
import asyncio
import logging

from sqlalchemy import select

from edugrade.core.database import AsyncSessionLocal
from edugrade.models import Estudiante
from edugrade.services.registro_academico import materias_a_documento, normalizar_materias

logger = logging.getLogger(__name__)


async def backfill_periodos() -> int:
    """Reescribe los documentos que no coinciden con su forma normalizada. Devuelve cuántos cambió."""
    actualizados = 0
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Estudiante))
        for estudiante in result.scalars().all():
            original = estudiante.materias or []
            normalizado = materias_a_documento(normalizar_materias(original))
            if normalizado != original:
                estudiante.materias = normalizado
                actualizados += 1
                logger.info("Estudiante %s: documento de materias completado", estudiante.id)
        await session.commit()
    return actualizados


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    total = asyncio.run(backfill_periodos())
    print(f"Listo. Estudiantes actualizados: {total}")
