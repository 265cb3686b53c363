"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends

from sheets_dialer.api.v1.dependencies.repository_deps import get_lead_repository
from sheets_dialer.application.use_cases.lead_use_cases import LeadUseCases
from sheets_dialer.application.use_cases.sync_use_cases import SheetsSyncUseCases
from sheets_dialer.core.config import settings
from sheets_dialer.infrastructure.external.sheets_sync.supabase_repository import SupabaseLeadRepository


def get_lead_use_cases(
    repository: SupabaseLeadRepository = Depends(get_lead_repository)
) -> LeadUseCases:
    """
    Dependencia para obtener los casos de uso de leads.

    Args:
        repository: Repositorio de leads

    Returns:
        LeadUseCases: Instancia de casos de uso de leads
    """
    return LeadUseCases(repository)


def get_sync_use_cases() -> SheetsSyncUseCases:
    """
    Dependencia para obtener los casos de uso del sync.

    Returns:
        SheetsSyncUseCases: Instancia construida desde Settings
    """
    return SheetsSyncUseCases(settings)
