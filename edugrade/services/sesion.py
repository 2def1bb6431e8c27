"""Ciclo de vida de la sesión: inicio, sesión actual, cierre y vista inicial.

La sesión no es un estado global: cada request construye un `ServicioSesion`
con su proveedor de identidad y la lista de observadores registrada en el
arranque de la aplicación.
"""
import inspect
import logging
from collections.abc import Callable

from edugrade.core.errores import (
    AccesoDenegado,
    CredencialesInvalidas,
    RolDesconocido,
    SesionInvalida,
)
from edugrade.core.security import create_access_token, decode_access_token
from edugrade.schemas.auth import CuentaDatos, Destino, Rol
from edugrade.services.repositorios import ProveedorIdentidad

logger = logging.getLogger(__name__)

EVENTO_INICIO_SESION = "inicio_sesion"
EVENTO_CIERRE_SESION = "cierre_sesion"

ObservadorSesion = Callable[[str, CuentaDatos], object]


class ServicioSesion:
    def __init__(
        self,
        proveedor: ProveedorIdentidad,
        observadores: list[ObservadorSesion] | None = None,
    ):
        self.proveedor = proveedor
        self._observadores = observadores if observadores is not None else []

    def suscribir(self, observador: ObservadorSesion) -> Callable[[], None]:
        """Registra un observador de eventos de sesión; devuelve la función para darlo de baja."""
        self._observadores.append(observador)

        def _cancelar() -> None:
            if observador in self._observadores:
                self._observadores.remove(observador)

        return _cancelar

    async def _notificar(self, evento: str, cuenta: CuentaDatos) -> None:
        for observador in list(self._observadores):
            resultado = observador(evento, cuenta)
            if inspect.isawaitable(resultado):
                await resultado

    async def _abrir(self, cuenta: CuentaDatos) -> str:
        jti = await self.proveedor.abrir_sesion(cuenta.id)
        token = create_access_token(cuenta.id, jti, email=cuenta.email, rol=cuenta.rol.value)
        await self._notificar(EVENTO_INICIO_SESION, cuenta)
        return token

    async def iniciar_sesion(self, email: str, contrasena: str) -> tuple[str, CuentaDatos]:
        """Autentica y abre una sesión. Devuelve el token y la cuenta con su rol."""
        try:
            cuenta = await self.proveedor.autenticar(email, contrasena)
        except CredencialesInvalidas:
            logger.info("Intento de inicio de sesión fallido para '%s'", email)
            raise
        token = await self._abrir(cuenta)
        logger.info("Sesión iniciada: cuenta %s (rol %s)", cuenta.id, cuenta.rol.value)
        return token, cuenta

    async def registrar_profesor(self, nombre: str, email: str, contrasena: str) -> tuple[str, CuentaDatos]:
        """Registra un profesor y deja su sesión iniciada."""
        cuenta = await self.proveedor.registrar_profesor(nombre, email, contrasena)
        logger.info("Profesor registrado: %s", cuenta.email)
        token = await self._abrir(cuenta)
        return token, cuenta

    async def _payload(self, token: str | None) -> dict | None:
        if not token:
            return None
        payload = decode_access_token(token)
        if payload is None or not await self.proveedor.sesion_activa(payload["jti"]):
            return None
        return payload

    async def sesion_actual(self, token: str | None) -> CuentaDatos | None:
        """Cuenta de la sesión activa, con su rol resuelto de nuevo; None si no hay sesión."""
        payload = await self._payload(token)
        if payload is None:
            return None
        return await self.proveedor.obtener_cuenta(payload["sub"])

    async def cerrar_sesion(self, token: str | None) -> None:
        """Cierra la sesión y notifica a los observadores."""
        payload = await self._payload(token)
        if payload is None:
            raise SesionInvalida()
        await self.proveedor.cerrar_sesion(payload["jti"])
        cuenta = await self.proveedor.obtener_cuenta(payload["sub"])
        if cuenta is not None:
            await self._notificar(EVENTO_CIERRE_SESION, cuenta)
        logger.info("Sesión cerrada: cuenta %s", payload["sub"])


def destino_inicial(cuenta: CuentaDatos | None) -> Destino:
    """Vista que corresponde a la sesión. Un rol desconocido nunca abre un panel."""
    if cuenta is None:
        return Destino.LOGIN
    if cuenta.rol == Rol.PROFESOR:
        return Destino.PANEL_PROFESOR
    if cuenta.rol == Rol.ESTUDIANTE:
        return Destino.PANEL_ESTUDIANTE
    return Destino.ROL_DESCONOCIDO


def exigir_rol(cuenta: CuentaDatos, rol: Rol) -> CuentaDatos:
    """Bloquea el acceso si la cuenta no tiene el rol pedido."""
    if cuenta.rol == Rol.DESCONOCIDO:
        logger.warning("Acceso bloqueado: cuenta %s con rol desconocido", cuenta.id)
        raise RolDesconocido()
    if cuenta.rol != rol:
        raise AccesoDenegado()
    return cuenta
