"""Esquemas del documento de calificaciones (materia → año → período → notas)."""
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

NotaValor = Annotated[float, Field(ge=0, le=10)]
# None es la casilla vacía
Casilla = NotaValor | None

CASILLAS_TAREAS = 4
CASILLAS_EXAMENES = 3
CASILLAS_EXPOSICIONES = 3


class NotasPeriodo(BaseModel):
    """Las 10 casillas de un período: 4 tareas, 3 exámenes y 3 exposiciones."""

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Casilla, ...] = Field(
        default=(None,) * CASILLAS_TAREAS,
        min_length=CASILLAS_TAREAS,
        max_length=CASILLAS_TAREAS,
        description="Notas de tareas (0-10 o null)",
    )
    exams: tuple[Casilla, ...] = Field(
        default=(None,) * CASILLAS_EXAMENES,
        min_length=CASILLAS_EXAMENES,
        max_length=CASILLAS_EXAMENES,
        description="Notas de exámenes (0-10 o null)",
    )
    presentations: tuple[Casilla, ...] = Field(
        default=(None,) * CASILLAS_EXPOSICIONES,
        min_length=CASILLAS_EXPOSICIONES,
        max_length=CASILLAS_EXPOSICIONES,
        description="Notas de exposiciones (0-10 o null)",
    )

    def casillas(self) -> list[Casilla]:
        return [*self.tasks, *self.exams, *self.presentations]


class MateriaRegistro(BaseModel):
    """Materia asignada a un estudiante, con sus años y períodos."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Nombre de la materia (único por estudiante)")
    years: dict[str, dict[str, NotasPeriodo]] = Field(
        default_factory=dict,
        description="Año (etiqueta) → 'Periodo N' → notas",
    )


class EstadoNota(BaseModel):
    """Etiqueta de aprobación y estilo de presentación."""

    model_config = ConfigDict(frozen=True)

    status: str = Field(description="Etiqueta: Excelente, Aprobado o Reprobado")
    estilo: str = Field(description="Etiqueta de estilo para el frontend (green, blue, red)")
    aprobado: bool


class ResumenPeriodo(BaseModel):
    """Promedios, nota final y estado de un período."""

    promedio_tareas: float
    promedio_examenes: float
    promedio_exposiciones: float
    nota_final: float = Field(description="Nota final redondeada a un decimal")
    estado: EstadoNota


class NotasPeriodoResponse(BaseModel):
    """Notas de un período con su resumen calculado (formulario de calificaciones)."""

    estudiante_id: str
    materia: str
    anio: str
    periodo: str
    notas: NotasPeriodo
    resumen: ResumenPeriodo
