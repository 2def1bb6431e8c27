"""Routers de la API."""
from fastapi import APIRouter

from edugrade.api.endpoints import auth, estudiante, profesor

router = APIRouter()
router.include_router(auth.router)
router.include_router(profesor.router)
router.include_router(estudiante.router)


@router.get(
    "/",
    tags=["api"],
    summary="Raíz de la API v1",
    response_description="Mensaje de bienvenida y enlace a la documentación",
)
async def api_root():
    """Información básica de la API y enlace a la documentación Swagger."""
    return {"message": "EduGrade API v1", "docs": "/docs", "redoc": "/redoc"}
