"""
Errores del pipeline Google Sheets -> Supabase.

Todos heredan de SheetsSyncError para que el orquestador pueda convertirlos
en un SyncResult fallido sin distinguir el origen.
"""

from __future__ import annotations


class SheetsSyncError(RuntimeError):
    """Error base del sync."""


class SyncConfigError(SheetsSyncError):
    """Error de configuración del pipeline (variables faltantes o inválidas)."""


class NoHeaderError(SheetsSyncError):
    """El rango del header no devolvió ninguna fila."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"Could not find header row in sheet '{sheet_name}'")
        self.sheet_name = sheet_name


class SheetMetadataError(SheetsSyncError):
    """La hoja solicitada no existe en la metadata del spreadsheet."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"Sheet '{sheet_name}' not found in spreadsheet metadata")
        self.sheet_name = sheet_name


class UpstreamFetchError(SheetsSyncError):
    """Falló una lectura contra la API de Google Sheets."""


class StoreWriteError(SheetsSyncError):
    """Supabase rechazó el UPSERT masivo."""


class LeadStoreError(SheetsSyncError):
    """Falló una lectura contra la tabla de leads."""
