"""Punto de entrada de la aplicación FastAPI."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from edugrade.api import router as api_router
from edugrade.core.config import settings
from edugrade.core.database import init_db
from edugrade.core.errores import EduGradeError, ErrorValidacion
from edugrade.models import *  # noqa: F401, F403 - Registra modelos en Base.metadata antes de init_db
from edugrade.schemas.auth import CuentaDatos

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "auth",
        "description": "Inicio y cierre de sesión, registro de profesores y vista inicial según el rol.",
    },
    {
        "name": "profesor",
        "description": "Panel de profesor: estudiantes, materias y notas por año y período.",
    },
    {
        "name": "estudiante",
        "description": "Panel de estudiante: notas propias, promedios, nota final y estado.",
    },
    {
        "name": "api",
        "description": "Endpoints generales de la API v1.",
    },
    {
        "name": "salud",
        "description": "Comprobación del estado del servicio.",
    },
]


def registrar_evento_sesion(evento: str, cuenta: CuentaDatos) -> None:
    """Observador de sesión: deja constancia de inicios y cierres en el log."""
    logger.info("Evento de sesión '%s': cuenta %s (rol %s)", evento, cuenta.id, cuenta.rol.value)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestiona el ciclo de vida: inicio y cierre de la aplicación."""
    await init_db()
    logger.info("%s iniciada", settings.app_name)
    yield


app = FastAPI(
    title=settings.app_name,
    description="""
API REST de **EduGrade**: registro de calificaciones por materia, año y período.

- Los profesores se registran, crean a sus estudiantes y cargan las notas
  (4 tareas, 3 exámenes y 3 exposiciones por período).
- La nota final pondera tareas 40 %, exámenes 40 % y exposiciones 20 %.
- Los estudiantes consultan sus notas y promedios.

Obtén un token con **POST /api/v1/auth/login** y úsalo en el botón **Authorize**.
""",
    version="0.1.0",
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={"persistAuthorization": True},
)

# Observadores de sesión compartidos por todos los requests
app.state.observadores_sesion = [registrar_evento_sesion]


@app.exception_handler(EduGradeError)
async def edugrade_error_handler(request: Request, exc: EduGradeError):
    """Convierte los errores de dominio en una respuesta JSON con su código."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Body o parámetros inválidos: misma forma que los errores de dominio, con el primer campo rechazado."""
    errores = exc.errors()
    mensaje = None
    if errores:
        campo = ".".join(str(p) for p in errores[0].get("loc", ()) if p != "body")
        mensaje = f"Dato inválido en '{campo}': {errores[0].get('msg', '')}"
    error = ErrorValidacion(mensaje)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# CORS: permitir acceso desde cualquier origen (frontend en otro puerto/dominio)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get(
    "/health",
    tags=["salud"],
    summary="Estado del servicio",
    response_description="Indica que la API está en ejecución",
)
async def health_check():
    """Comprueba que el servicio está activo. No requiere autenticación."""
    return {"status": "ok", "message": "Servicio en ejecución"}
