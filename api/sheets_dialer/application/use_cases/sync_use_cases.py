"""
Casos de uso para la sincronizacion Google Sheets -> Supabase.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from loguru import logger

from sheets_dialer.infrastructure.external.sheets_sync.sync_config import SyncOptions
from sheets_dialer.infrastructure.external.sheets_sync.sync_service import (
    SyncResult,
    build_from_settings,
)


class SheetsSyncUseCases:
    """
    Dispara una corrida del sync desde el API.

    El pipeline se construye en cada llamada a partir de Settings, de modo que
    una configuracion incompleta falla aca (SyncConfigError) y no al importar.
    """

    def __init__(self, settings: Any) -> None:
        self._settings = settings

    def default_options(self) -> SyncOptions:
        return SyncOptions(
            sheet_name=self._settings.SYNC_SHEET_NAME,
            batch_size=self._settings.SYNC_BATCH_SIZE,
        )

    def _run(self, options: SyncOptions) -> SyncResult:
        service, _, _ = build_from_settings(self._settings)
        return service.run_sync(options)

    async def run_sync(self, options: Optional[SyncOptions] = None) -> SyncResult:
        """
        Ejecuta una corrida en un thread separado (las llamadas a Google y
        Supabase son bloqueantes).
        """
        options = options or self.default_options()
        logger.info(f"Iniciando sync Google Sheets -> Supabase (hoja '{options.sheet_name}') desde API")
        return await asyncio.to_thread(self._run, options)
