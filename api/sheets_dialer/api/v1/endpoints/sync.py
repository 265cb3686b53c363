"""
Endpoints para sincronizacion de Google Sheets -> Supabase.
Lo invoca el cron de la plataforma de hosting o un operador manualmente.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from loguru import logger

from sheets_dialer.api.v1.dependencies.auth_deps import get_current_user
from sheets_dialer.api.v1.dependencies.use_case_deps import get_lead_use_cases, get_sync_use_cases
from sheets_dialer.application.dto.auth_dto import SessionUserDTO
from sheets_dialer.application.dto.lead_dto import LastSyncDTO
from sheets_dialer.application.use_cases.lead_use_cases import LeadUseCases
from sheets_dialer.application.use_cases.sync_use_cases import SheetsSyncUseCases
from sheets_dialer.infrastructure.external.sheets_sync.sync_config import SyncOptions


router = APIRouter(prefix="/sync-sheets", tags=["Sync"])


@router.api_route(
    "",
    methods=["GET", "POST"],
    summary="Sincronizar Google Sheets con Supabase",
)
async def sync_sheets(
    sheet_name: Optional[str] = Query(default=None, description="Hoja a leer (default: SYNC_SHEET_NAME)"),
    batch_size: Optional[int] = Query(default=None, ge=1, description="Filas por lectura a Google Sheets"),
    force_full_sync: bool = Query(default=False, description="Aceptado por compatibilidad; cada corrida es completa"),
    use_cases: SheetsSyncUseCases = Depends(get_sync_use_cases),
) -> JSONResponse:
    """
    Ejecuta una corrida completa del sync.

    - 200 con el resultado si todas las filas se leyeron y escribieron
    - 500 {"error": "Sync failed"} si la corrida fallo (lectura o escritura)
    - 500 {"error": "Unexpected error during sync"} si algo fallo fuera de la corrida
    """
    try:
        defaults = use_cases.default_options()
        options = SyncOptions(
            sheet_name=sheet_name or defaults.sheet_name,
            batch_size=batch_size or defaults.batch_size,
            force_full_sync=force_full_sync,
        )
        result = await use_cases.run_sync(options)
    except Exception as e:
        logger.error(f"Error in sync API route: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Unexpected error during sync", "message": str(e)},
        )

    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Sync failed", "details": result.error},
        )

    body = {
        "success": True,
        "message": f"Successfully synced {result.rows_processed} leads",
    }
    body.update(result.to_dict())
    return JSONResponse(status_code=status.HTTP_200_OK, content=body)


@router.api_route(
    "",
    methods=["PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def sync_sheets_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers={"Allow": "GET, POST"},
    )


@router.get(
    "/status",
    response_model=LastSyncDTO,
    summary="Ultimo last_sync registrado en la tabla de leads",
)
async def sync_status(
    _: SessionUserDTO = Depends(get_current_user),
    use_cases: LeadUseCases = Depends(get_lead_use_cases),
) -> LastSyncDTO:
    return await use_cases.get_last_sync()
