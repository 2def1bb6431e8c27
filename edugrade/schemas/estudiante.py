"""Esquemas para estudiantes: registro, listado, materias y paneles."""
from pydantic import BaseModel, Field, field_validator

from edugrade.schemas.calificaciones import MateriaRegistro, NotasPeriodo, ResumenPeriodo


class EstudianteRegistro(BaseModel):
    """Registro completo de un estudiante tal como lo guarda el repositorio."""

    id: str
    nombre_completo: str
    usuario: str
    profesor_id: str
    cuenta_id: str | None = None
    materias: list[MateriaRegistro] = Field(default_factory=list)


class EstudianteCreate(BaseModel):
    """Body para registrar un estudiante. Debe incluir al menos una materia."""

    nombre: str = Field(description="Nombre completo del estudiante", min_length=1)
    usuario: str = Field(description="Usuario de acceso (único)", min_length=1)
    contrasena: str = Field(description="Contraseña inicial", min_length=1)
    materias: list[str] = Field(description="Materias a asignar", min_length=1)

    @field_validator("nombre", "usuario")
    @classmethod
    def sin_espacios_extremos(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("no puede estar vacío")
        return v


class AsignarMateriaRequest(BaseModel):
    """Body para asignar una materia a un estudiante."""

    nombre: str = Field(description="Nombre de la materia", min_length=1)
    anio: int | None = Field(default=None, description="Año inicial. Por defecto, el actual.")


class EstudianteItem(BaseModel):
    """Fila del listado de estudiantes del profesor."""

    id: str
    nombre_completo: str
    usuario: str
    materias: list[str] = Field(default_factory=list)
    tiene_calificaciones: bool = False


class EstudianteListResponse(BaseModel):
    estudiantes: list[EstudianteItem]


class EstudianteCreadoResponse(BaseModel):
    """Respuesta del registro: el registro y el usuario con el que iniciará sesión."""

    estudiante: EstudianteRegistro
    usuario: str
    mensaje: str


class ResumenProfesorResponse(BaseModel):
    """Tarjetas del resumen del panel de profesor."""

    total_estudiantes: int
    total_materias: int = Field(description="Materias distintas entre todos los estudiantes")
    estudiantes_con_calificaciones: int


# ── Panel del estudiante ─────────────────────────────────────────────


class PanelPeriodo(BaseModel):
    periodo: str
    notas: NotasPeriodo
    resumen: ResumenPeriodo


class PanelAnio(BaseModel):
    anio: str
    periodos: list[PanelPeriodo]


class PanelMateria(BaseModel):
    nombre: str
    anios: list[PanelAnio]


class PanelEstudianteResponse(BaseModel):
    """Materias del estudiante con notas, promedios, nota final y estado por período."""

    id: str
    nombre_completo: str
    usuario: str
    profesor: str | None = Field(default=None, description="Nombre del profesor a cargo")
    materias: list[PanelMateria]
