"""Modelos SQLAlchemy (tablas de la base de datos)."""
from edugrade.models.cuenta import Cuenta
from edugrade.models.profesor import Profesor
from edugrade.models.estudiante import Estudiante
from edugrade.models.sesion import Sesion

__all__ = [
    "Cuenta",
    "Profesor",
    "Estudiante",
    "Sesion",
]
