"""Modelo Profesor (perfil de la cuenta que gestiona estudiantes)."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edugrade.core.database import Base

if TYPE_CHECKING:
    from edugrade.models.estudiante import Estudiante


class Profesor(Base):
    """Perfil de profesor; su id es el de la cuenta."""

    __tablename__ = "profesores"

    id: Mapped[str] = mapped_column(String(36), ForeignKey("cuentas.id"), primary_key=True)
    nombre_completo: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    rol: Mapped[str] = mapped_column(
        Text, nullable=False, default="teacher", server_default=text("'teacher'")
    )

    estudiantes: Mapped[list["Estudiante"]] = relationship(
        "Estudiante", back_populates="profesor"
    )
