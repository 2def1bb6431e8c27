"""Adaptadores SQLAlchemy de los repositorios de estudiantes e identidad.

Ambos comparten la `AsyncSession` del request: la cuenta de un estudiante se
agrega con `flush` y se confirma junto con su registro en un solo commit.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from edugrade.core.errores import (
    CredencialesInvalidas,
    EmailDuplicado,
    ErrorRed,
    IdentidadDuplicada,
    NoEncontrado,
)
from edugrade.core.security import hash_password, verify_password
from edugrade.models import Cuenta, Estudiante, Profesor, Sesion
from edugrade.schemas.auth import CuentaDatos, Rol
from edugrade.schemas.calificaciones import MateriaRegistro
from edugrade.schemas.estudiante import EstudianteRegistro
from edugrade.services.registro_academico import materias_a_documento, normalizar_materias
from edugrade.services.repositorios import (
    ProveedorIdentidad,
    RepositorioEstudiantes,
    validar_contrasena,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _conexion():
    """Traduce fallos de conexión del driver a `ErrorRed`."""
    try:
        yield
    except (OperationalError, OSError) as e:
        logger.error("Base de datos no disponible: %s", e)
        raise ErrorRed() from e


def _a_registro(estudiante: Estudiante) -> EstudianteRegistro:
    return EstudianteRegistro(
        id=estudiante.id,
        nombre_completo=estudiante.nombre_completo,
        usuario=estudiante.usuario,
        profesor_id=estudiante.profesor_id,
        cuenta_id=estudiante.cuenta_id,
        materias=normalizar_materias(estudiante.materias),
    )


class RepositorioEstudiantesSQL(RepositorioEstudiantes):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def listar_estudiantes(self, profesor_id: str) -> list[EstudianteRegistro]:
        async with _conexion():
            result = await self.db.execute(
                select(Estudiante)
                .where(Estudiante.profesor_id == profesor_id)
                .order_by(Estudiante.nombre_completo)
            )
            return [_a_registro(e) for e in result.scalars().all()]

    async def obtener_estudiante(self, estudiante_id: str) -> EstudianteRegistro | None:
        async with _conexion():
            estudiante = await self.db.get(Estudiante, estudiante_id)
            return _a_registro(estudiante) if estudiante else None

    async def obtener_estudiante_por_cuenta(self, cuenta_id: str) -> EstudianteRegistro | None:
        async with _conexion():
            result = await self.db.execute(
                select(Estudiante).where(Estudiante.cuenta_id == cuenta_id)
            )
            estudiante = result.scalar_one_or_none()
            return _a_registro(estudiante) if estudiante else None

    async def crear_estudiante(self, registro: EstudianteRegistro) -> EstudianteRegistro:
        async with _conexion():
            existente = await self.db.execute(
                select(Estudiante.id).where(
                    or_(Estudiante.id == registro.id, Estudiante.usuario == registro.usuario)
                )
            )
            if existente.first():
                raise IdentidadDuplicada(f"El usuario '{registro.usuario}' ya está registrado.")

            estudiante = Estudiante(
                id=registro.id,
                nombre_completo=registro.nombre_completo,
                usuario=registro.usuario,
                profesor_id=registro.profesor_id,
                cuenta_id=registro.cuenta_id,
                materias=materias_a_documento(registro.materias),
            )
            self.db.add(estudiante)
            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                raise IdentidadDuplicada(f"El usuario '{registro.usuario}' ya está registrado.") from e
            await self.db.refresh(estudiante)
            return _a_registro(estudiante)

    async def actualizar_materias(
        self, estudiante_id: str, materias: list[MateriaRegistro]
    ) -> EstudianteRegistro:
        async with _conexion():
            estudiante = await self.db.get(Estudiante, estudiante_id)
            if not estudiante:
                raise NoEncontrado("Estudiante no encontrado.")
            # Asignar una lista nueva para que SQLAlchemy detecte el cambio en la columna JSON
            estudiante.materias = materias_a_documento(materias)
            await self.db.commit()
            await self.db.refresh(estudiante)
            return _a_registro(estudiante)


class ProveedorIdentidadSQL(ProveedorIdentidad):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _cuenta_por_email(self, email: str) -> Cuenta | None:
        result = await self.db.execute(select(Cuenta).where(Cuenta.email == email))
        return result.scalar_one_or_none()

    async def autenticar(self, email: str, contrasena: str) -> CuentaDatos:
        async with _conexion():
            cuenta = await self._cuenta_por_email(email.strip())
            if not cuenta or not verify_password(contrasena, cuenta.password_hash or ""):
                raise CredencialesInvalidas()
            return await self._cuenta_datos(cuenta)

    async def registrar_profesor(self, nombre: str, email: str, contrasena: str) -> CuentaDatos:
        email = email.strip()
        validar_contrasena(contrasena)
        async with _conexion():
            if await self._cuenta_por_email(email):
                raise EmailDuplicado()
            cuenta = Cuenta(email=email, password_hash=hash_password(contrasena))
            self.db.add(cuenta)
            await self.db.flush()
            self.db.add(Profesor(id=cuenta.id, nombre_completo=nombre, email=email, rol=Rol.PROFESOR.value))
            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                raise EmailDuplicado() from e
            return CuentaDatos(id=cuenta.id, email=email, nombre=nombre, rol=Rol.PROFESOR)

    async def crear_cuenta_estudiante(self, usuario: str, contrasena: str) -> str:
        validar_contrasena(contrasena)
        async with _conexion():
            if await self._cuenta_por_email(usuario):
                raise IdentidadDuplicada(f"El usuario '{usuario}' ya está registrado.")
            cuenta = Cuenta(email=usuario, password_hash=hash_password(contrasena))
            self.db.add(cuenta)
            # Sin commit: se confirma junto con el registro del estudiante
            await self.db.flush()
            return cuenta.id

    async def _cuenta_datos(self, cuenta: Cuenta) -> CuentaDatos:
        profesor = await self.db.get(Profesor, cuenta.id)
        if profesor:
            return CuentaDatos(id=cuenta.id, email=cuenta.email, nombre=profesor.nombre_completo, rol=Rol.PROFESOR)
        result = await self.db.execute(
            select(Estudiante.nombre_completo).where(Estudiante.cuenta_id == cuenta.id)
        )
        nombre_estudiante = result.scalar_one_or_none()
        if nombre_estudiante is not None:
            return CuentaDatos(id=cuenta.id, email=cuenta.email, nombre=nombre_estudiante, rol=Rol.ESTUDIANTE)
        logger.warning("Cuenta %s autenticada sin perfil de profesor ni de estudiante", cuenta.id)
        return CuentaDatos(id=cuenta.id, email=cuenta.email, rol=Rol.DESCONOCIDO)

    async def obtener_cuenta(self, cuenta_id: str) -> CuentaDatos | None:
        async with _conexion():
            cuenta = await self.db.get(Cuenta, cuenta_id)
            return await self._cuenta_datos(cuenta) if cuenta else None

    async def resolver_rol(self, cuenta_id: str) -> Rol:
        cuenta = await self.obtener_cuenta(cuenta_id)
        return cuenta.rol if cuenta else Rol.DESCONOCIDO

    async def nombre_profesor(self, profesor_id: str) -> str | None:
        async with _conexion():
            profesor = await self.db.get(Profesor, profesor_id)
            return profesor.nombre_completo if profesor else None

    async def abrir_sesion(self, cuenta_id: str) -> str:
        async with _conexion():
            sesion = Sesion(cuenta_id=cuenta_id)
            self.db.add(sesion)
            await self.db.commit()
            return sesion.jti

    async def sesion_activa(self, jti: str) -> bool:
        async with _conexion():
            sesion = await self.db.get(Sesion, jti)
            return sesion is not None and sesion.cerrada_en is None

    async def cerrar_sesion(self, jti: str) -> None:
        async with _conexion():
            await self.db.execute(
                update(Sesion)
                .where(Sesion.jti == jti, Sesion.cerrada_en.is_(None))
                .values(cerrada_en=datetime.now(timezone.utc))
            )
            await self.db.commit()
