"""Modelo Sesion (tokens emitidos y su cierre)."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from edugrade.core.database import Base
from edugrade.models.cuenta import nuevo_id


class Sesion(Base):
    """Sesión abierta por un login; el JWT lleva su id en `jti`."""

    __tablename__ = "sesiones"

    jti: Mapped[str] = mapped_column(String(36), primary_key=True, default=nuevo_id)
    cuenta_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("cuentas.id"), nullable=False, index=True
    )
    abierta_en: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    cerrada_en: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
