"""Interfaces de los colaboradores de persistencia e identidad.

Los servicios y endpoints dependen solo de estas clases abstractas. Cada
backend tiene su adaptador: `repositorio_sql` (base de datos) y
`repositorio_memoria` (en proceso, equivalente al almacenamiento local del
navegador).
"""
from abc import ABC, abstractmethod

from edugrade.core.config import settings
from edugrade.core.errores import ContrasenaDebil
from edugrade.schemas.auth import CuentaDatos, Rol
from edugrade.schemas.calificaciones import MateriaRegistro
from edugrade.schemas.estudiante import EstudianteRegistro


def validar_contrasena(contrasena: str) -> None:
    """Misma regla que el proveedor de autenticación: mínimo 6 caracteres."""
    minimo = settings.longitud_minima_contrasena
    if len(contrasena or "") < minimo:
        raise ContrasenaDebil(f"La contraseña debe tener al menos {minimo} caracteres.")


class RepositorioEstudiantes(ABC):
    """Almacén de registros de estudiantes."""

    @abstractmethod
    async def listar_estudiantes(self, profesor_id: str) -> list[EstudianteRegistro]:
        """Todos los estudiantes a cargo del profesor."""

    @abstractmethod
    async def obtener_estudiante(self, estudiante_id: str) -> EstudianteRegistro | None:
        """Un registro o None si no existe."""

    @abstractmethod
    async def obtener_estudiante_por_cuenta(self, cuenta_id: str) -> EstudianteRegistro | None:
        """Registro vinculado a la cuenta con la que inició sesión el estudiante."""

    @abstractmethod
    async def crear_estudiante(self, registro: EstudianteRegistro) -> EstudianteRegistro:
        """Persiste el registro. `IdentidadDuplicada` si el id o el usuario ya existen."""

    @abstractmethod
    async def actualizar_materias(
        self, estudiante_id: str, materias: list[MateriaRegistro]
    ) -> EstudianteRegistro:
        """Reemplaza la colección completa de materias. `NoEncontrado` si el estudiante no existe."""


class ProveedorIdentidad(ABC):
    """Autenticación, perfiles y registro de sesiones."""

    @abstractmethod
    async def autenticar(self, email: str, contrasena: str) -> CuentaDatos:
        """Cuenta con su rol resuelto, o `CredencialesInvalidas`."""

    @abstractmethod
    async def registrar_profesor(self, nombre: str, email: str, contrasena: str) -> CuentaDatos:
        """Crea la cuenta y el perfil de profesor. `EmailDuplicado` o `ContrasenaDebil`."""

    @abstractmethod
    async def crear_cuenta_estudiante(self, usuario: str, contrasena: str) -> str:
        """Crea la cuenta de acceso de un estudiante y devuelve su id. `IdentidadDuplicada` o `ContrasenaDebil`."""

    @abstractmethod
    async def obtener_cuenta(self, cuenta_id: str) -> CuentaDatos | None:
        """Cuenta con su rol resuelto, o None."""

    @abstractmethod
    async def resolver_rol(self, cuenta_id: str) -> Rol:
        """Rol según el perfil encontrado; `Rol.DESCONOCIDO` si no hay ninguno."""

    @abstractmethod
    async def nombre_profesor(self, profesor_id: str) -> str | None:
        """Nombre completo del profesor, o None si no existe."""

    @abstractmethod
    async def abrir_sesion(self, cuenta_id: str) -> str:
        """Registra una sesión nueva y devuelve su id (jti)."""

    @abstractmethod
    async def sesion_activa(self, jti: str) -> bool:
        """True si la sesión existe y no fue cerrada."""

    @abstractmethod
    async def cerrar_sesion(self, jti: str) -> None:
        """Marca la sesión como cerrada. Cerrar una sesión ya cerrada no falla."""
