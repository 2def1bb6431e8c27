"""Script para crear un profesor de demostración con dos estudiantes."""
import asyncio

from edugrade.core.database import AsyncSessionLocal, init_db
from edugrade.core.errores import EmailDuplicado
from edugrade.models import *  # noqa: F401, F403 - Registra modelos en Base.metadata antes de init_db
from edugrade.schemas.estudiante import EstudianteCreate
from edugrade.services.estudiante_service import EstudianteService
from edugrade.services.repositorio_sql import ProveedorIdentidadSQL, RepositorioEstudiantesSQL

PROFESOR_NOMBRE = "Profesora Demo"
PROFESOR_EMAIL = "profesora@edugrade.edu"
# Contraseña de prueba (se guarda hasheada con bcrypt)
PROFESOR_PASSWORD_PLAIN = "demo1234"

ESTUDIANTES = [
    ("Ana Torres", "ana.torres", ["Matemáticas", "Historia"]),
    ("Luis Romero", "luis.romero", ["Matemáticas", "Ciencias"]),
]
ESTUDIANTE_PASSWORD_PLAIN = "alumno123"


async def seed_profesor_demo():
    await init_db()
    async with AsyncSessionLocal() as session:
        proveedor = ProveedorIdentidadSQL(session)
        try:
            cuenta = await proveedor.registrar_profesor(
                PROFESOR_NOMBRE, PROFESOR_EMAIL, PROFESOR_PASSWORD_PLAIN
            )
        except EmailDuplicado:
            print(f"  = Profesor existente: {PROFESOR_EMAIL}. No se crean estudiantes.")
            return
        print(f"  + Profesor creado: id={cuenta.id}, email={cuenta.email}")

        service = EstudianteService(RepositorioEstudiantesSQL(session), proveedor)
        for nombre, usuario, materias in ESTUDIANTES:
            estudiante = await service.registrar(
                cuenta.id,
                EstudianteCreate(
                    nombre=nombre,
                    usuario=usuario,
                    contrasena=ESTUDIANTE_PASSWORD_PLAIN,
                    materias=materias,
                ),
            )
            print(f"  + Estudiante creado: {estudiante.nombre_completo} ({estudiante.usuario})")
    print("Listo.")
    print(f"  Login profesor: {PROFESOR_EMAIL} / {PROFESOR_PASSWORD_PLAIN}")
    print(f"  Login estudiantes: <usuario> / {ESTUDIANTE_PASSWORD_PLAIN}")


if __name__ == "__main__":
    asyncio.run(seed_profesor_demo())
