"""Modelo Estudiante (registro con el documento de materias y calificaciones)."""
from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edugrade.core.database import Base
from edugrade.models.cuenta import nuevo_id

if TYPE_CHECKING:
    from edugrade.models.profesor import Profesor


class Estudiante(Base):
    """Estudiante creado por un profesor.

    `materias` guarda el documento completo:
    [{"name": ..., "years": {"2025": {"Periodo 1": {"tasks": [...], "exams": [...],
    "presentations": [...]}, ...}}}]
    """

    __tablename__ = "estudiantes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=nuevo_id)
    nombre_completo: Mapped[str] = mapped_column(Text, nullable=False)
    usuario: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    profesor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profesores.id"), nullable=False, index=True
    )
    cuenta_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("cuentas.id"), nullable=True, unique=True
    )
    materias: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    profesor: Mapped["Profesor"] = relationship("Profesor", back_populates="estudiantes")
