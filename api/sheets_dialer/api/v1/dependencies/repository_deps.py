"""
Dependencias para inyección de repositorios.
"""
from fastapi import Depends

from sheets_dialer.api.v1.dependencies.auth_deps import get_session_token
from sheets_dialer.core.config import settings
from sheets_dialer.infrastructure.external.sheets_sync.supabase_repository import (
    SupabaseCredentials,
    SupabaseLeadRepository,
)


def get_lead_repository(
    token: str = Depends(get_session_token)
) -> SupabaseLeadRepository:
    """
    Dependencia para obtener el repositorio de leads.

    Usa la anon key + el token del usuario, de modo que las politicas RLS
    de Supabase se aplican igual que en el cliente web.

    Args:
        token: Access token de la sesion

    Returns:
        SupabaseLeadRepository: Instancia del repositorio de leads
    """
    return SupabaseLeadRepository(
        SupabaseCredentials(url=settings.SUPABASE_URL, key=settings.SUPABASE_ANON_KEY),
        table=settings.SUPABASE_LEADS_TABLE,
        access_token=token,
        timeout_s=settings.HTTP_TIMEOUT_S,
    )
