"""
Endpoints del dashboard de leads (lista paginada + detalle "dialer").
Requieren una sesion valida de Supabase.
"""
from fastapi import APIRouter, Depends, Query

from sheets_dialer.api.v1.dependencies.auth_deps import get_current_user
from sheets_dialer.api.v1.dependencies.use_case_deps import get_lead_use_cases
from sheets_dialer.application.dto.auth_dto import SessionUserDTO
from sheets_dialer.application.dto.lead_dto import LeadDTO, LeadPageDTO
from sheets_dialer.application.use_cases.lead_use_cases import LeadUseCases

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.get("", response_model=LeadPageDTO)
async def list_leads(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
    _: SessionUserDTO = Depends(get_current_user),
    use_cases: LeadUseCases = Depends(get_lead_use_cases),
):
    """
    Obtener una pagina de leads (mas recientes primero).
    """
    return await use_cases.list_leads(page=page, page_size=page_size)


@router.get("/{lead_id}", response_model=LeadDTO)
async def get_lead(
    lead_id: str,
    _: SessionUserDTO = Depends(get_current_user),
    use_cases: LeadUseCases = Depends(get_lead_use_cases),
):
    """
    Obtener un lead por ID.
    """
    return await use_cases.get_lead(lead_id)
