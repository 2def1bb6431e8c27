"""Modelo Cuenta (identidad de acceso)."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from edugrade.core.database import Base


def nuevo_id() -> str:
    return str(uuid.uuid4())


class Cuenta(Base):
    """Credenciales de un usuario. El rol se resuelve por su perfil (profesor o estudiante)."""

    __tablename__ = "cuentas"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=nuevo_id)
    # Email del profesor o nombre de usuario del estudiante
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    creada_en: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
