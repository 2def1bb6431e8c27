"""Endpoints de autenticación y dependencias para proteger rutas por rol."""
from typing import Callable

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from edugrade.api.deps import get_servicio_sesion
from edugrade.core.errores import RolDesconocido, SesionInvalida
from edugrade.schemas.auth import (
    CuentaDatos,
    Destino,
    LoginRequest,
    RegistroProfesorRequest,
    Rol,
    SesionResponse,
    TokenResponse,
)
from edugrade.services.sesion import ServicioSesion, destino_inicial, exigir_rol

router = APIRouter(prefix="/auth", tags=["auth"])
security = HTTPBearer(auto_error=False)


def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    if not credentials or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


async def get_cuenta_actual(
    token: str | None = Depends(get_token),
    servicio: ServicioSesion = Depends(get_servicio_sesion),
) -> CuentaDatos:
    """Dependencia: exige una sesión activa y devuelve la cuenta con su rol."""
    cuenta = await servicio.sesion_actual(token)
    if cuenta is None:
        raise SesionInvalida()
    return cuenta


def require_rol(rol: Rol) -> Callable:
    """Dependencia que exige que la cuenta actual tenga el rol indicado."""

    async def _check(cuenta: CuentaDatos = Depends(get_cuenta_actual)) -> CuentaDatos:
        return exigir_rol(cuenta, rol)

    return _check


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Iniciar sesión",
    responses={
        200: {"description": "Login correcto, se devuelve el access_token"},
        401: {"description": "Credenciales incorrectas"},
    },
)
async def login(data: LoginRequest, servicio: ServicioSesion = Depends(get_servicio_sesion)):
    """
    Autenticación con **email** (o usuario de estudiante) y **contraseña**.
    Devuelve el token y la vista inicial según el rol. Una cuenta sin perfil
    recibe `rol_desconocido` y no tiene acceso a ningún panel.
    """
    token, cuenta = await servicio.iniciar_sesion(data.email, data.password)
    return TokenResponse(access_token=token, cuenta=cuenta, destino=destino_inicial(cuenta))


@router.post(
    "/registro",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar profesor",
    responses={
        409: {"description": "El email ya está registrado"},
        422: {"description": "Contraseña débil o datos inválidos"},
    },
)
async def registrar_profesor(
    data: RegistroProfesorRequest,
    servicio: ServicioSesion = Depends(get_servicio_sesion),
):
    """Registro exclusivo de profesores. Deja la sesión iniciada."""
    token, cuenta = await servicio.registrar_profesor(data.nombre.strip(), data.email, data.password)
    return TokenResponse(access_token=token, cuenta=cuenta, destino=destino_inicial(cuenta))


@router.post(
    "/logout",
    summary="Cerrar sesión",
    responses={401: {"description": "Sesión no iniciada o ya cerrada"}},
)
async def logout(
    token: str | None = Depends(get_token),
    servicio: ServicioSesion = Depends(get_servicio_sesion),
):
    await servicio.cerrar_sesion(token)
    return {"message": "Sesión cerrada correctamente"}


@router.get(
    "/sesion",
    response_model=SesionResponse,
    summary="Sesión actual",
    response_description="Cuenta activa (o ninguna) y vista inicial",
)
async def sesion_actual(
    token: str | None = Depends(get_token),
    servicio: ServicioSesion = Depends(get_servicio_sesion),
):
    """Se consulta al cargar la aplicación para decidir la vista inicial. No exige token."""
    cuenta = await servicio.sesion_actual(token)
    destino = destino_inicial(cuenta)
    mensaje = RolDesconocido.mensaje_por_defecto if destino == Destino.ROL_DESCONOCIDO else None
    return SesionResponse(
        autenticado=cuenta is not None,
        cuenta=cuenta,
        destino=destino,
        mensaje=mensaje,
    )
