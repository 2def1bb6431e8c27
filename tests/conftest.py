# tests/conftest.py

import asyncio
import os
import tempfile
from pathlib import Path

import pytest

# La configuración se lee al importar la app: la base de tests debe fijarse antes
_TEST_DB = Path(tempfile.mkdtemp(prefix="edugrade-tests-")) / "edugrade_test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB}"

from fastapi.testclient import TestClient  # noqa: E402

from edugrade.core.database import drop_db, init_db  # noqa: E402
from edugrade.main import app  # noqa: E402
from edugrade.services.estudiante_service import EstudianteService  # noqa: E402
from edugrade.services.repositorio_memoria import (  # noqa: E402
    ProveedorIdentidadMemoria,
    RepositorioEstudiantesMemoria,
)


@pytest.fixture
def repositorio():
    return RepositorioEstudiantesMemoria()


@pytest.fixture
def proveedor(repositorio):
    return ProveedorIdentidadMemoria(repositorio)


@pytest.fixture
def estudiante_service(repositorio, proveedor):
    return EstudianteService(repositorio, proveedor)


@pytest.fixture
def db():
    """Base SQLite de tests recreada desde cero."""
    asyncio.run(drop_db())
    asyncio.run(init_db())


@pytest.fixture
def client(db):
    """Cliente HTTP contra una base SQLite limpia en cada test."""
    with TestClient(app) as c:
        yield c


def registrar_profesor(client, email="profe@edugrade.edu", nombre="Marta Díaz", password="secreta1"):
    """Registra un profesor y devuelve los headers con su token."""
    response = client.post(
        "/api/v1/auth/registro",
        json={"nombre": nombre, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def iniciar_sesion(client, email, password):
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
