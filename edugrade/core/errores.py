"""Errores de dominio de EduGrade.

Los servicios lanzan estas excepciones; el manejador registrado en `main.py`
las convierte en respuestas HTTP con `detail` (mensaje para el usuario) y
`codigo` (identificador estable para el frontend).
"""
from enum import Enum


class CodigoError(str, Enum):
    # === Autenticación ===
    CREDENCIALES_INVALIDAS = "CREDENCIALES_INVALIDAS"
    SESION_INVALIDA = "SESION_INVALIDA"
    ROL_DESCONOCIDO = "ROL_DESCONOCIDO"
    ACCESO_DENEGADO = "ACCESO_DENEGADO"

    # === Restricciones de unicidad ===
    EMAIL_DUPLICADO = "EMAIL_DUPLICADO"
    IDENTIDAD_DUPLICADA = "IDENTIDAD_DUPLICADA"

    # === Validación ===
    CONTRASENA_DEBIL = "CONTRASENA_DEBIL"
    VALIDACION = "VALIDACION"

    # === Recursos ===
    NO_ENCONTRADO = "NO_ENCONTRADO"

    # === Colaboradores externos ===
    ERROR_RED = "ERROR_RED"


class EduGradeError(Exception):
    """Base de todos los errores de dominio."""

    codigo: CodigoError = CodigoError.VALIDACION
    status_code: int = 400
    mensaje_por_defecto: str = "Ocurrió un error inesperado."

    def __init__(self, mensaje: str | None = None):
        self.mensaje = mensaje or self.mensaje_por_defecto
        super().__init__(self.mensaje)

    def to_dict(self) -> dict:
        return {"detail": self.mensaje, "codigo": self.codigo.value}


class CredencialesInvalidas(EduGradeError):
    codigo = CodigoError.CREDENCIALES_INVALIDAS
    status_code = 401
    mensaje_por_defecto = "Credenciales incorrectas. Verifica tu email y contraseña."


class SesionInvalida(EduGradeError):
    codigo = CodigoError.SESION_INVALIDA
    status_code = 401
    mensaje_por_defecto = "Sesión no iniciada, inválida o expirada."


class RolDesconocido(EduGradeError):
    codigo = CodigoError.ROL_DESCONOCIDO
    status_code = 403
    mensaje_por_defecto = (
        "Tu cuenta no tiene un perfil de profesor ni de estudiante. Contacta al administrador."
    )


class AccesoDenegado(EduGradeError):
    codigo = CodigoError.ACCESO_DENEGADO
    status_code = 403
    mensaje_por_defecto = "No tienes acceso a este panel."


class EmailDuplicado(EduGradeError):
    codigo = CodigoError.EMAIL_DUPLICADO
    status_code = 409
    mensaje_por_defecto = "Este email ya está registrado. Por favor, inicia sesión."


class IdentidadDuplicada(EduGradeError):
    codigo = CodigoError.IDENTIDAD_DUPLICADA
    status_code = 409
    mensaje_por_defecto = "Ya existe un registro con esa identidad."


class ContrasenaDebil(EduGradeError):
    codigo = CodigoError.CONTRASENA_DEBIL
    status_code = 422
    mensaje_por_defecto = "La contraseña debe tener al menos 6 caracteres."


class ErrorValidacion(EduGradeError):
    codigo = CodigoError.VALIDACION
    status_code = 422
    mensaje_por_defecto = "Datos inválidos."


class NoEncontrado(EduGradeError):
    codigo = CodigoError.NO_ENCONTRADO
    status_code = 404
    mensaje_por_defecto = "Registro no encontrado."


class ErrorRed(EduGradeError):
    codigo = CodigoError.ERROR_RED
    status_code = 503
    mensaje_por_defecto = "No se pudo contactar con el servicio de datos. Inténtalo de nuevo."
