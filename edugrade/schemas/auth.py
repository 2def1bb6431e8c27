"""Esquemas para autenticación, cuentas y sesión."""
from enum import Enum

from pydantic import BaseModel, EmailStr, Field


class Rol(str, Enum):
    """Rol de la cuenta, resuelto a partir de su perfil."""

    PROFESOR = "teacher"
    ESTUDIANTE = "student"
    DESCONOCIDO = "unknown"


class Destino(str, Enum):
    """Vista inicial que corresponde a la sesión."""

    LOGIN = "login"
    PANEL_PROFESOR = "panel_profesor"
    PANEL_ESTUDIANTE = "panel_estudiante"
    ROL_DESCONOCIDO = "rol_desconocido"


class LoginRequest(BaseModel):
    """Body del endpoint de login. Los estudiantes usan su nombre de usuario como email."""

    email: str = Field(description="Email del profesor o usuario del estudiante", min_length=1, examples=["profe@edugrade.edu"])
    password: str = Field(description="Contraseña en texto plano", min_length=1)


class RegistroProfesorRequest(BaseModel):
    """Body del registro de profesores (único registro público)."""

    nombre: str = Field(description="Nombre completo", min_length=1)
    email: EmailStr = Field(description="Correo electrónico (único)")
    password: str = Field(description="Contraseña (mínimo 6 caracteres)", min_length=1)


class CuentaDatos(BaseModel):
    """Cuenta autenticada con su rol resuelto."""

    id: str
    email: str
    nombre: str | None = None
    rol: Rol = Rol.DESCONOCIDO


class TokenResponse(BaseModel):
    """Respuesta con access_token JWT y datos de la cuenta."""

    access_token: str = Field(description="Token JWT para enviar en header Authorization: Bearer <token>")
    token_type: str = Field(default="bearer", description="Tipo de token (siempre 'bearer')")
    cuenta: CuentaDatos
    destino: Destino = Field(description="Vista inicial según el rol")


class SesionResponse(BaseModel):
    """Estado de la sesión actual, usado al cargar la aplicación."""

    autenticado: bool
    cuenta: CuentaDatos | None = None
    destino: Destino
    mensaje: str | None = Field(default=None, description="Motivo del bloqueo si el rol es desconocido")
