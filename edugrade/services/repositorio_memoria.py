"""Adaptadores en memoria (un proceso, sin base de datos).

Guardan los registros serializados a documentos JSON, igual que el
almacenamiento local del navegador, de modo que ningún objeto devuelto
comparte referencias con lo almacenado.
"""
import uuid

from edugrade.core.errores import (
    CredencialesInvalidas,
    EmailDuplicado,
    IdentidadDuplicada,
    NoEncontrado,
)
from edugrade.core.security import hash_password, verify_password
from edugrade.schemas.auth import CuentaDatos, Rol
from edugrade.schemas.calificaciones import MateriaRegistro
from edugrade.schemas.estudiante import EstudianteRegistro
from edugrade.services.registro_academico import materias_a_documento, normalizar_materias
from edugrade.services.repositorios import (
    ProveedorIdentidad,
    RepositorioEstudiantes,
    validar_contrasena,
)


class RepositorioEstudiantesMemoria(RepositorioEstudiantes):
    def __init__(self):
        self._estudiantes: dict[str, dict] = {}

    @staticmethod
    def _a_registro(documento: dict) -> EstudianteRegistro:
        return EstudianteRegistro(
            **{k: v for k, v in documento.items() if k != "materias"},
            materias=normalizar_materias(documento.get("materias")),
        )

    async def listar_estudiantes(self, profesor_id: str) -> list[EstudianteRegistro]:
        documentos = [doc for doc in self._estudiantes.values() if doc["profesor_id"] == profesor_id]
        return [
            self._a_registro(doc)
            for doc in sorted(documentos, key=lambda doc: doc["nombre_completo"])
        ]

    async def obtener_estudiante(self, estudiante_id: str) -> EstudianteRegistro | None:
        documento = self._estudiantes.get(estudiante_id)
        return self._a_registro(documento) if documento else None

    async def obtener_estudiante_por_cuenta(self, cuenta_id: str) -> EstudianteRegistro | None:
        for documento in self._estudiantes.values():
            if documento.get("cuenta_id") == cuenta_id:
                return self._a_registro(documento)
        return None

    async def crear_estudiante(self, registro: EstudianteRegistro) -> EstudianteRegistro:
        if registro.id in self._estudiantes:
            raise IdentidadDuplicada(f"Ya existe un estudiante con id '{registro.id}'.")
        if any(doc["usuario"] == registro.usuario for doc in self._estudiantes.values()):
            raise IdentidadDuplicada(f"El usuario '{registro.usuario}' ya está registrado.")
        self._estudiantes[registro.id] = registro.model_dump(mode="json")
        return self._a_registro(self._estudiantes[registro.id])

    async def actualizar_materias(
        self, estudiante_id: str, materias: list[MateriaRegistro]
    ) -> EstudianteRegistro:
        documento = self._estudiantes.get(estudiante_id)
        if documento is None:
            raise NoEncontrado("Estudiante no encontrado.")
        self._estudiantes[estudiante_id] = {**documento, "materias": materias_a_documento(materias)}
        return self._a_registro(self._estudiantes[estudiante_id])

    # Acceso directo para sembrar datos antiguos en tests y scripts
    def guardar_documento(self, documento: dict) -> None:
        self._estudiantes[documento["id"]] = documento


class ProveedorIdentidadMemoria(ProveedorIdentidad):
    """Cuentas, perfiles de profesor y sesiones en memoria.

    Los perfiles de estudiante se buscan en el repositorio de estudiantes.
    """

    def __init__(self, repositorio: RepositorioEstudiantesMemoria):
        self._repositorio = repositorio
        self._cuentas: dict[str, dict] = {}
        self._profesores: dict[str, dict] = {}
        self._sesiones: dict[str, bool] = {}

    def _cuenta_por_email(self, email: str) -> dict | None:
        for cuenta in self._cuentas.values():
            if cuenta["email"] == email:
                return cuenta
        return None

    def _crear_cuenta(self, email: str, contrasena: str) -> str:
        cuenta_id = str(uuid.uuid4())
        self._cuentas[cuenta_id] = {
            "id": cuenta_id,
            "email": email,
            "password_hash": hash_password(contrasena),
        }
        return cuenta_id

    async def autenticar(self, email: str, contrasena: str) -> CuentaDatos:
        cuenta = self._cuenta_por_email(email.strip())
        if not cuenta or not verify_password(contrasena, cuenta["password_hash"]):
            raise CredencialesInvalidas()
        return await self.obtener_cuenta(cuenta["id"])

    async def registrar_profesor(self, nombre: str, email: str, contrasena: str) -> CuentaDatos:
        email = email.strip()
        validar_contrasena(contrasena)
        if self._cuenta_por_email(email):
            raise EmailDuplicado()
        cuenta_id = self._crear_cuenta(email, contrasena)
        self._profesores[cuenta_id] = {"id": cuenta_id, "nombre_completo": nombre, "email": email}
        return CuentaDatos(id=cuenta_id, email=email, nombre=nombre, rol=Rol.PROFESOR)

    async def crear_cuenta_estudiante(self, usuario: str, contrasena: str) -> str:
        validar_contrasena(contrasena)
        if self._cuenta_por_email(usuario):
            raise IdentidadDuplicada(f"El usuario '{usuario}' ya está registrado.")
        return self._crear_cuenta(usuario, contrasena)

    async def obtener_cuenta(self, cuenta_id: str) -> CuentaDatos | None:
        cuenta = self._cuentas.get(cuenta_id)
        if not cuenta:
            return None
        profesor = self._profesores.get(cuenta_id)
        if profesor:
            return CuentaDatos(id=cuenta_id, email=cuenta["email"], nombre=profesor["nombre_completo"], rol=Rol.PROFESOR)
        estudiante = await self._repositorio.obtener_estudiante_por_cuenta(cuenta_id)
        if estudiante:
            return CuentaDatos(id=cuenta_id, email=cuenta["email"], nombre=estudiante.nombre_completo, rol=Rol.ESTUDIANTE)
        return CuentaDatos(id=cuenta_id, email=cuenta["email"], rol=Rol.DESCONOCIDO)

    async def resolver_rol(self, cuenta_id: str) -> Rol:
        cuenta = await self.obtener_cuenta(cuenta_id)
        return cuenta.rol if cuenta else Rol.DESCONOCIDO

    async def nombre_profesor(self, profesor_id: str) -> str | None:
        profesor = self._profesores.get(profesor_id)
        return profesor["nombre_completo"] if profesor else None

    async def abrir_sesion(self, cuenta_id: str) -> str:
        jti = str(uuid.uuid4())
        self._sesiones[jti] = True
        return jti

    async def sesion_activa(self, jti: str) -> bool:
        return self._sesiones.get(jti, False)

    async def cerrar_sesion(self, jti: str) -> None:
        if jti in self._sesiones:
            self._sesiones[jti] = False

    # Acceso directo para tests: cuenta sin perfil de profesor ni de estudiante
    def crear_cuenta_sin_perfil(self, email: str, contrasena: str) -> str:
        return self._crear_cuenta(email, contrasena)
