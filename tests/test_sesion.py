# tests/test_sesion.py

import pytest

from edugrade.api.deps import get_servicio_sesion
from edugrade.core.errores import (
    AccesoDenegado,
    CredencialesInvalidas,
    RolDesconocido,
    SesionInvalida,
)
from edugrade.schemas.auth import CuentaDatos, Destino, Rol
from edugrade.services.sesion import (
    EVENTO_CIERRE_SESION,
    EVENTO_INICIO_SESION,
    ServicioSesion,
    destino_inicial,
    exigir_rol,
)


@pytest.fixture
def servicio(proveedor):
    return ServicioSesion(proveedor)


def test_initial_view_per_role():
    assert destino_inicial(None) == Destino.LOGIN
    assert destino_inicial(CuentaDatos(id="1", email="a", rol=Rol.PROFESOR)) == Destino.PANEL_PROFESOR
    assert destino_inicial(CuentaDatos(id="2", email="b", rol=Rol.ESTUDIANTE)) == Destino.PANEL_ESTUDIANTE
    assert destino_inicial(CuentaDatos(id="3", email="c", rol=Rol.DESCONOCIDO)) == Destino.ROL_DESCONOCIDO


def test_unknown_role_is_blocked_from_both_dashboards():
    cuenta = CuentaDatos(id="3", email="c", rol=Rol.DESCONOCIDO)
    with pytest.raises(RolDesconocido):
        exigir_rol(cuenta, Rol.PROFESOR)
    with pytest.raises(RolDesconocido):
        exigir_rol(cuenta, Rol.ESTUDIANTE)


def test_wrong_role_is_denied():
    profesor = CuentaDatos(id="1", email="a", rol=Rol.PROFESOR)
    assert exigir_rol(profesor, Rol.PROFESOR) is profesor
    with pytest.raises(AccesoDenegado):
        exigir_rol(profesor, Rol.ESTUDIANTE)


@pytest.mark.asyncio
async def test_account_without_profile_resolves_unknown(servicio, proveedor):
    proveedor.crear_cuenta_sin_perfil("huerfana@edugrade.edu", "secreta1")

    token, cuenta = await servicio.iniciar_sesion("huerfana@edugrade.edu", "secreta1")

    assert cuenta.rol == Rol.DESCONOCIDO
    assert destino_inicial(cuenta) == Destino.ROL_DESCONOCIDO
    actual = await servicio.sesion_actual(token)
    assert actual.rol == Rol.DESCONOCIDO


@pytest.mark.asyncio
async def test_wrong_password(servicio, proveedor):
    await proveedor.registrar_profesor("Marta Díaz", "profe@edugrade.edu", "secreta1")

    with pytest.raises(CredencialesInvalidas):
        await servicio.iniciar_sesion("profe@edugrade.edu", "otra-clave")


@pytest.mark.asyncio
async def test_register_teacher_opens_session(servicio):
    token, cuenta = await servicio.registrar_profesor("Marta Díaz", "profe@edugrade.edu", "secreta1")

    assert cuenta.rol == Rol.PROFESOR
    actual = await servicio.sesion_actual(token)
    assert actual.id == cuenta.id


@pytest.mark.asyncio
async def test_logout_closes_session_and_notifies(proveedor, mocker):
    observador = mocker.Mock(return_value=None)
    servicio = ServicioSesion(proveedor, [observador])
    token, cuenta = await servicio.registrar_profesor("Marta Díaz", "profe@edugrade.edu", "secreta1")

    await servicio.cerrar_sesion(token)

    assert await servicio.sesion_actual(token) is None
    assert [c.args[0] for c in observador.call_args_list] == [EVENTO_INICIO_SESION, EVENTO_CIERRE_SESION]
    assert observador.call_args_list[-1].args[1].id == cuenta.id


@pytest.mark.asyncio
async def test_logout_twice_fails(servicio):
    token, _ = await servicio.registrar_profesor("Marta Díaz", "profe@edugrade.edu", "secreta1")
    await servicio.cerrar_sesion(token)

    with pytest.raises(SesionInvalida):
        await servicio.cerrar_sesion(token)


@pytest.mark.asyncio
async def test_async_observer_and_unsubscribe(servicio, mocker):
    observador = mocker.AsyncMock()
    cancelar = servicio.suscribir(observador)

    token, _ = await servicio.registrar_profesor("Marta Díaz", "profe@edugrade.edu", "secreta1")
    observador.assert_awaited_once()

    cancelar()
    await servicio.cerrar_sesion(token)
    observador.assert_awaited_once()


@pytest.mark.asyncio
async def test_tampered_token_has_no_session(servicio):
    assert await servicio.sesion_actual("no-es-un-jwt") is None
    assert await servicio.sesion_actual(None) is None


def test_request_service_does_not_share_observer_list(proveedor, mocker):
    globales = [mocker.Mock(return_value=None)]
    request = mocker.Mock()
    request.app.state.observadores_sesion = globales

    servicio = get_servicio_sesion(request, proveedor)
    servicio.suscribir(mocker.Mock(return_value=None))

    assert len(globales) == 1
    assert len(get_servicio_sesion(request, proveedor)._observadores) == 1
