"""Endpoints del panel de profesor: estudiantes, materias y calificaciones."""
import logging
from io import BytesIO

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from edugrade.api.deps import get_estudiante_service
from edugrade.api.endpoints.auth import require_rol
from edugrade.schemas.auth import CuentaDatos, Rol
from edugrade.schemas.calificaciones import NotasPeriodo, NotasPeriodoResponse
from edugrade.schemas.estudiante import (
    AsignarMateriaRequest,
    EstudianteCreadoResponse,
    EstudianteCreate,
    EstudianteListResponse,
    EstudianteRegistro,
    ResumenProfesorResponse,
)
from edugrade.services import reporte_pdf_service
from edugrade.services.estudiante_service import EstudianteService, construir_panel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profesor", tags=["profesor"])

solo_profesor = require_rol(Rol.PROFESOR)


@router.get(
    "/resumen",
    response_model=ResumenProfesorResponse,
    summary="Resumen del panel de profesor",
)
async def resumen(
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    """Total de estudiantes, materias distintas y estudiantes con alguna nota."""
    return await service.resumen_profesor(profesor.id)


@router.get(
    "/estudiantes",
    response_model=EstudianteListResponse,
    summary="Listar mis estudiantes",
)
async def listar_estudiantes(
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    return EstudianteListResponse(estudiantes=await service.listar(profesor.id))


@router.post(
    "/estudiantes",
    response_model=EstudianteCreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar estudiante",
    responses={
        409: {"description": "El usuario ya existe"},
        422: {"description": "Contraseña débil, materia duplicada o datos inválidos"},
    },
)
async def crear_estudiante(
    body: EstudianteCreate,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    """
    Crea la cuenta de acceso del estudiante y su registro. Cada materia se crea
    con el año actual y los cuatro períodos vacíos.
    """
    estudiante = await service.registrar(profesor.id, body)
    return EstudianteCreadoResponse(
        estudiante=estudiante,
        usuario=estudiante.usuario,
        mensaje=f"Estudiante {estudiante.nombre_completo} registrado correctamente.",
    )


@router.get(
    "/estudiantes/{estudiante_id}",
    response_model=EstudianteRegistro,
    summary="Detalle de un estudiante",
    responses={404: {"description": "Estudiante no encontrado"}},
)
async def obtener_estudiante(
    estudiante_id: str,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    return await service.obtener_del_profesor(profesor.id, estudiante_id)


@router.post(
    "/estudiantes/{estudiante_id}/materias",
    response_model=EstudianteRegistro,
    status_code=status.HTTP_201_CREATED,
    summary="Asignar materia",
    responses={
        404: {"description": "Estudiante no encontrado"},
        422: {"description": "Materia vacía o ya asignada"},
    },
)
async def asignar_materia(
    estudiante_id: str,
    body: AsignarMateriaRequest,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    return await service.asignar_materia(profesor.id, estudiante_id, body.nombre, body.anio)


@router.delete(
    "/estudiantes/{estudiante_id}/materias/{materia}",
    response_model=EstudianteRegistro,
    summary="Quitar materia",
    responses={404: {"description": "Estudiante o materia no encontrados"}},
)
async def eliminar_materia(
    estudiante_id: str,
    materia: str,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    return await service.eliminar_materia(profesor.id, estudiante_id, materia)


@router.get(
    "/estudiantes/{estudiante_id}/materias/{materia}/{anio}/{periodo}",
    response_model=NotasPeriodoResponse,
    summary="Notas de un período",
)
async def obtener_notas(
    estudiante_id: str,
    materia: str,
    anio: str,
    periodo: str,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    """Las 10 casillas del período con promedios, nota final y estado."""
    return await service.notas_periodo(profesor.id, estudiante_id, materia, anio, periodo)


@router.put(
    "/estudiantes/{estudiante_id}/materias/{materia}/{anio}/{periodo}",
    response_model=NotasPeriodoResponse,
    summary="Guardar notas de un período",
    responses={
        404: {"description": "Estudiante o materia no encontrados"},
        422: {"description": "Nota fuera de 0-10 o período inválido"},
    },
)
async def guardar_notas(
    estudiante_id: str,
    materia: str,
    anio: str,
    periodo: str,
    body: NotasPeriodo,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    """
    Reemplaza las notas del período: 4 tareas, 3 exámenes y 3 exposiciones.
    Las casillas en `null` quedan vacías y no cuentan en el promedio.
    """
    return await service.guardar_notas(profesor.id, estudiante_id, materia, anio, periodo, body)


@router.get(
    "/estudiantes/{estudiante_id}/boletin",
    summary="Boletín PDF de un estudiante",
    response_class=StreamingResponse,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def boletin_estudiante(
    estudiante_id: str,
    profesor: CuentaDatos = Depends(solo_profesor),
    service: EstudianteService = Depends(get_estudiante_service),
):
    estudiante = await service.obtener_del_profesor(profesor.id, estudiante_id)
    panel = construir_panel(estudiante, profesor.nombre)
    pdf_bytes = reporte_pdf_service.generar_boletin(panel, usuario_nombre=profesor.nombre or profesor.email)
    logger.info("Boletín generado por el profesor %s para el estudiante %s", profesor.id, estudiante_id)

    filename = f"boletin_{estudiante.usuario}.pdf"
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
