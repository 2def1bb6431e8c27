"""Endpoints del panel de estudiante (solo lectura)."""
from io import BytesIO

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from edugrade.api.deps import get_estudiante_service
from edugrade.api.endpoints.auth import require_rol
from edugrade.schemas.auth import CuentaDatos, Rol
from edugrade.schemas.estudiante import PanelEstudianteResponse
from edugrade.services import reporte_pdf_service
from edugrade.services.estudiante_service import EstudianteService

router = APIRouter(prefix="/estudiante", tags=["estudiante"])

solo_estudiante = require_rol(Rol.ESTUDIANTE)


@router.get(
    "/panel",
    response_model=PanelEstudianteResponse,
    summary="Mis calificaciones",
    responses={
        403: {"description": "La cuenta no es de estudiante o su rol es desconocido"},
        404: {"description": "No se encontraron los datos del estudiante"},
    },
)
async def panel(
    cuenta: CuentaDatos = Depends(solo_estudiante),
    service: EstudianteService = Depends(get_estudiante_service),
):
    """
    Materias del estudiante con el nombre de su profesor. Por cada año y período:
    las notas, el promedio por categoría, la nota final y el estado.
    """
    return await service.panel_estudiante(cuenta.id)


@router.get(
    "/boletin",
    summary="Mi boletín PDF",
    response_class=StreamingResponse,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def boletin(
    cuenta: CuentaDatos = Depends(solo_estudiante),
    service: EstudianteService = Depends(get_estudiante_service),
):
    datos = await service.panel_estudiante(cuenta.id)
    pdf_bytes = reporte_pdf_service.generar_boletin(datos, usuario_nombre=datos.nombre_completo)
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="boletin_{datos.usuario}.pdf"'},
    )
