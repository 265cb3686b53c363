"""
Servicio de sincronización Google Sheets -> Supabase.

Diseño (resumen):
- Lee el header de la hoja (fila 1)
- Lee la metadata para conocer el total de filas
- Lee filas en bloques de batch_size, secuencialmente
- Mapea cada fila a un LeadRecord (campos = headers normalizados)
- Un solo UPSERT con todos los registros, conflicto por sheet_row_id

Estrategia de idempotencia:
- UPSERT por sheet_row_id: correr N veces sobre la misma hoja no duplica filas.
- Todo o nada por corrida: si falla una lectura, no se escribe nada.

Limitaciones conocidas:
- sheet_row_id es posicional (insertar/borrar filas desplaza identidades).
- Columnas renombradas/eliminadas en la hoja quedan con su valor viejo en la tabla.
- Filas borradas de la hoja nunca se borran de la tabla.
- Dos corridas simultáneas no se excluyen: gana la última escritura.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from loguru import logger

from .sheets_client import GoogleServiceAccount, GoogleSheetsClient
from .supabase_repository import SupabaseCredentials, SupabaseLeadRepository
from .sync_config import SheetsSyncConfig, SyncOptions
from .errors import NoHeaderError
from .types import LeadRecord, SheetRow, isoformat_utc, normalize_header, utc_now


def map_sheet_row_to_lead(sheet_row: SheetRow, *, synced_at: datetime) -> LeadRecord:
    """
    Mapea una fila de la hoja a un LeadRecord.

    Reglas:
    - cada header se normaliza (minúsculas, espacios -> '_')
    - el valor es la celda en la misma posición, o None si la fila es más corta
    - sheet_row_id = posición absoluta de la fila; last_sync = inicio de la corrida
    """
    fields: dict[str, Optional[str]] = {}
    data_row = sheet_row.data_row
    for index, header in enumerate(sheet_row.header_row):
        fields[normalize_header(header)] = data_row[index] if index < len(data_row) else None

    return LeadRecord(
        sheet_row_id=str(sheet_row.row_index),
        last_sync=synced_at,
        fields=fields,
    )


@dataclass(frozen=True)
class SyncResult:
    success: bool
    sync_start_time: datetime
    sync_end_time: datetime
    rows_processed: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Forma pública del resultado (claves camelCase del contrato HTTP/CLI)."""
        payload: dict[str, Any] = {
            "success": self.success,
            "syncStartTime": isoformat_utc(self.sync_start_time),
            "syncEndTime": isoformat_utc(self.sync_end_time),
        }
        if self.success:
            payload["rowsProcessed"] = self.rows_processed or 0
        else:
            payload["error"] = self.error
        return payload


class SheetsToSupabaseSync:
    """
    Orquestador del pipeline para una hoja.
    """

    def __init__(
        self,
        *,
        sheets: GoogleSheetsClient,
        lead_repo: SupabaseLeadRepository,
    ) -> None:
        self._sheets = sheets
        self._lead_repo = lead_repo

    def fetch_sheet_data(self, *, sheet_name: str, batch_size: int) -> list[SheetRow]:
        """
        Lee header + todas las filas de datos de la hoja.

        Las lecturas son secuenciales. Se detiene al recibir un bloque vacío o al
        llegar al total de filas declarado por la metadata.
        """
        header = self._sheets.read_header(sheet_name)
        if not header:
            raise NoHeaderError(sheet_name)
        header_row = tuple(header)

        total_rows = self._sheets.get_row_count(sheet_name)
        logger.info(f"Total rows in sheet '{sheet_name}': {total_rows}")

        sheet_rows: list[SheetRow] = []
        start_row = 2
        while start_row <= total_rows:
            end_row = min(start_row + batch_size - 1, total_rows)
            rows = self._sheets.read_rows(sheet_name, start_row, end_row)
            logger.debug(f"Fetched rows {start_row} to {end_row}: {len(rows)} rows")

            if not rows:
                break

            for offset, data_row in enumerate(rows):
                sheet_rows.append(
                    SheetRow(header_row=header_row, data_row=tuple(data_row), row_index=start_row + offset)
                )
            start_row += batch_size

        return sheet_rows

    def write_leads(self, leads: Iterable[LeadRecord]) -> int:
        leads_list = list(leads)
        # Hoja solo con header: no se envía un UPSERT vacío a Supabase
        if not leads_list:
            logger.info("No hay filas para escribir en Supabase")
            return 0
        return self._lead_repo.upsert_leads(leads_list)

    def run_sync(self, options: Optional[SyncOptions] = None) -> SyncResult:
        """
        Ejecuta una corrida completa (no incremental).

        Nunca lanza: cualquier error se pasa a options.on_error y se devuelve
        como SyncResult(success=False).
        """
        options = options or SyncOptions()
        sync_start_time = utc_now()
        logger.info(
            f"Starting sync at {isoformat_utc(sync_start_time)} "
            f"(sheet='{options.sheet_name}', batch_size={options.batch_size})"
        )
        if options.force_full_sync:
            logger.info("force_full_sync solicitado: cada corrida ya relee la hoja completa")

        try:
            sheet_rows = self.fetch_sheet_data(
                sheet_name=options.sheet_name, batch_size=options.batch_size
            )
            logger.info(f"Fetched {len(sheet_rows)} rows from sheet")

            leads = [map_sheet_row_to_lead(row, synced_at=sync_start_time) for row in sheet_rows]
            written = self.write_leads(leads)
            logger.success(f"Successfully synced {written} leads to Supabase")

            return SyncResult(
                success=True,
                sync_start_time=sync_start_time,
                sync_end_time=utc_now(),
                rows_processed=len(leads),
            )
        except Exception as exc:
            if options.on_error is not None:
                try:
                    options.on_error(exc)
                except Exception as cb_exc:
                    logger.error(f"on_error callback failed: {cb_exc}")
            return SyncResult(
                success=False,
                sync_start_time=sync_start_time,
                sync_end_time=utc_now(),
                error=str(exc),
            )


def build_sync_service(
    config: SheetsSyncConfig,
) -> tuple[SheetsToSupabaseSync, SupabaseLeadRepository, GoogleSheetsClient]:
    """
    Construye el pipeline a partir de una configuración ya validada.
    """
    sheets = GoogleSheetsClient(
        config.spreadsheet_id,
        GoogleServiceAccount(
            email=config.google_service_account_email,
            private_key=config.google_private_key,
        ),
    )
    lead_repo = SupabaseLeadRepository(
        SupabaseCredentials(url=config.supabase_url, key=config.supabase_service_role_key),
        table=config.leads_table,
        timeout_s=config.timeout_s,
    )
    service = SheetsToSupabaseSync(sheets=sheets, lead_repo=lead_repo)
    return service, lead_repo, sheets


def build_from_settings(
    settings: Any,
) -> tuple[SheetsToSupabaseSync, SupabaseLeadRepository, GoogleSheetsClient]:
    """
    Constructor “oficial” del pipeline a partir de Settings.

    Raises:
        SyncConfigError: si falta alguna variable requerida
    """
    return build_sync_service(SheetsSyncConfig.from_settings(settings))
