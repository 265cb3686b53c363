"""
Configuración del sync (Google Sheets -> Supabase).

- SheetsSyncConfig: credenciales y destino. Se construye una vez al iniciar el
  proceso y se pasa al orquestador; valida en el constructor (falla rápido).
- SyncOptions: parámetros de una corrida.

Este módulo no realiza I/O: solo define configuración.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger

from .errors import SyncConfigError

DEFAULT_SHEET_NAME = "Sheet1"
DEFAULT_BATCH_SIZE = 50


@dataclass(frozen=True)
class SheetsSyncConfig:
    """
    Config de una hoja de Google Sheets -> una tabla de Supabase.

    NOTA sobre la identidad:
    - sheet_row_id es la posición de la fila en la hoja. Insertar o borrar filas
      por encima de un registro desplaza la identidad de todos los siguientes.
    """

    google_service_account_email: str
    google_private_key: str
    spreadsheet_id: str
    supabase_url: str
    supabase_service_role_key: str
    leads_table: str = "leads"
    timeout_s: int = 30

    def __post_init__(self) -> None:
        required = {
            "GOOGLE_SERVICE_ACCOUNT_EMAIL": self.google_service_account_email,
            "GOOGLE_PRIVATE_KEY": self.google_private_key,
            "GOOGLE_SHEET_ID": self.spreadsheet_id,
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_SERVICE_ROLE_KEY": self.supabase_service_role_key,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise SyncConfigError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )
        if not self.leads_table:
            raise SyncConfigError("SUPABASE_LEADS_TABLE must not be empty")

    @classmethod
    def from_settings(cls, settings: Any) -> "SheetsSyncConfig":
        return cls(
            google_service_account_email=settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            google_private_key=settings.GOOGLE_PRIVATE_KEY,
            spreadsheet_id=settings.GOOGLE_SHEET_ID,
            supabase_url=settings.SUPABASE_URL,
            supabase_service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            leads_table=settings.SUPABASE_LEADS_TABLE,
            timeout_s=settings.HTTP_TIMEOUT_S,
        )


def _log_sync_error(exc: BaseException) -> None:
    logger.error(f"Sync error: {exc}")


@dataclass(frozen=True)
class SyncOptions:
    """
    Parámetros de una corrida.

    - batch_size solo afecta el tamaño de cada lectura a Google Sheets; el
      UPSERT se hace una vez con todas las filas.
    - force_full_sync se acepta pero no cambia el comportamiento: cada corrida
      ya relee la hoja completa.
    - on_error se invoca con la excepción antes de devolver el resultado fallido.
    """

    sheet_name: str = DEFAULT_SHEET_NAME
    batch_size: int = DEFAULT_BATCH_SIZE
    force_full_sync: bool = False
    on_error: Optional[Callable[[BaseException], None]] = _log_sync_error

    def __post_init__(self) -> None:
        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size!r}")
        if not (self.sheet_name or "").strip():
            raise ValueError("sheet_name must not be empty")
