"""
Casos de uso relacionados con leads.
Contiene la logica para paginar y consultar los leads sincronizados.
"""
import asyncio
import math

from loguru import logger

from sheets_dialer.application.dto.lead_dto import LastSyncDTO, LeadDTO, LeadPageDTO
from sheets_dialer.infrastructure.external.sheets_sync.errors import LeadStoreError
from sheets_dialer.infrastructure.external.sheets_sync.supabase_repository import SupabaseLeadRepository
from sheets_dialer.shared.exceptions.domain import EntityNotFoundException, LeadStoreUnavailableException


class LeadUseCases:
    """
    Casos de uso para el dashboard (lista + detalle "dialer").

    El repositorio es sincrono (requests); las llamadas se ejecutan en un
    thread para no bloquear el event loop.
    """

    def __init__(self, repository: SupabaseLeadRepository):
        self.repository = repository

    async def list_leads(self, page: int, page_size: int) -> LeadPageDTO:
        """
        Obtiene una pagina de leads, mas recientes primero.

        Args:
            page: Numero de pagina (1-based)
            page_size: Cantidad de leads por pagina

        Returns:
            LeadPageDTO: Pagina con items y totales
        """
        try:
            result = await asyncio.to_thread(
                self.repository.list_leads, page=page, page_size=page_size
            )
        except LeadStoreError as e:
            logger.error(f"Error fetching leads: {e}")
            raise LeadStoreUnavailableException(str(e)) from e

        total_pages = math.ceil(result.total_count / page_size) if result.total_count else 0
        return LeadPageDTO(
            items=[LeadDTO(**row) for row in result.items],
            page=result.page,
            page_size=result.page_size,
            total_count=result.total_count,
            total_pages=total_pages,
        )

    async def get_lead(self, lead_id: str) -> LeadDTO:
        """
        Obtiene un lead por su ID.

        Raises:
            EntityNotFoundException: Si el lead no existe
        """
        try:
            row = await asyncio.to_thread(self.repository.get_lead, lead_id)
        except LeadStoreError as e:
            logger.error(f"Error fetching lead {lead_id}: {e}")
            raise LeadStoreUnavailableException(str(e)) from e

        if not row:
            raise EntityNotFoundException("Lead", lead_id)

        return LeadDTO(**row)

    async def get_last_sync(self) -> LastSyncDTO:
        last_sync = await asyncio.to_thread(self.repository.get_last_sync_timestamp)
        return LastSyncDTO(last_sync=last_sync)
