"""Dependencias que construyen los colaboradores de cada request."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from edugrade.core.database import get_db
from edugrade.services.estudiante_service import EstudianteService
from edugrade.services.repositorio_sql import ProveedorIdentidadSQL, RepositorioEstudiantesSQL
from edugrade.services.repositorios import ProveedorIdentidad, RepositorioEstudiantes
from edugrade.services.sesion import ServicioSesion


def get_repositorio_estudiantes(db: AsyncSession = Depends(get_db)) -> RepositorioEstudiantes:
    return RepositorioEstudiantesSQL(db)


def get_proveedor_identidad(db: AsyncSession = Depends(get_db)) -> ProveedorIdentidad:
    return ProveedorIdentidadSQL(db)


def get_servicio_sesion(
    request: Request,
    proveedor: ProveedorIdentidad = Depends(get_proveedor_identidad),
) -> ServicioSesion:
    """Servicio de sesión con una copia de los observadores registrados al crear la aplicación."""
    return ServicioSesion(proveedor, list(request.app.state.observadores_sesion))


def get_estudiante_service(
    repositorio: RepositorioEstudiantes = Depends(get_repositorio_estudiantes),
    proveedor: ProveedorIdentidad = Depends(get_proveedor_identidad),
) -> EstudianteService:
    return EstudianteService(repositorio, proveedor)
