"""
Cliente mínimo de Google Sheets API v4 (solo lectura).

Requisitos cubiertos:
- autenticación con service account (google-auth)
- lectura del header, metadata de la hoja y rangos de filas
- rangos A1 con el título citado (evita "Unable to parse range")

No hay reintentos: cualquier fallo de la API se propaga como UpstreamFetchError
y la corrida completa se aborta.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import SheetMetadataError, SyncConfigError, UpstreamFetchError

SCOPES: Sequence[str] = ("https://www.googleapis.com/auth/spreadsheets.readonly",)
TOKEN_URI = "https://oauth2.googleapis.com/token"

# Ancho de columnas leído por defecto (A..Z)
DEFAULT_COLUMNS = 26


@dataclass(frozen=True)
class GoogleServiceAccount:
    email: str
    private_key: str


def restore_private_key(raw: str) -> str:
    """
    Las variables de entorno suelen traer la key con '\\n' literales.
    Se restauran a saltos de línea reales para que el PEM sea válido.
    """
    return (raw or "").replace("\\n", "\n")


def _column_letter(index: int) -> str:
    if index < 1:
        raise ValueError("Column index must be >= 1")
    letters: list[str] = []
    while index:
        index, remainder = divmod(index - 1, 26)
        letters.append(chr(65 + remainder))
    return "".join(reversed(letters))


def _http_status(exc: HttpError) -> str:
    resp = getattr(exc, "resp", None)
    return str(getattr(resp, "status", "?"))


def _quote_title(title: str) -> str:
    safe = (title or "").strip()
    if not safe:
        raise SyncConfigError("Sheet name must not be empty")
    return "'" + safe.replace("'", "''") + "'"


def a1_header_range(sheet_name: str, *, columns: int = DEFAULT_COLUMNS) -> str:
    """Rango A1 de la primera fila, ej: 'Sheet1'!A1:Z1"""
    return f"{_quote_title(sheet_name)}!A1:{_column_letter(columns)}1"


def a1_rows_range(
    sheet_name: str, start_row: int, end_row: int, *, columns: int = DEFAULT_COLUMNS
) -> str:
    """Rango A1 de un bloque de filas, ej: 'Sheet1'!A2:Z51"""
    if start_row < 1 or end_row < start_row:
        raise ValueError(f"Invalid row range {start_row}..{end_row}")
    return f"{_quote_title(sheet_name)}!A{start_row}:{_column_letter(columns)}{end_row}"


def build_sheets_service(account: GoogleServiceAccount):
    """
    Construye el recurso `sheets` v4 autenticado con la service account.
    """
    info = {
        "type": "service_account",
        "client_email": account.email,
        "private_key": restore_private_key(account.private_key),
        "token_uri": TOKEN_URI,
    }
    try:
        credentials = service_account.Credentials.from_service_account_info(info, scopes=list(SCOPES))
    except (ValueError, KeyError) as exc:
        raise SyncConfigError(f"Invalid Google service account credentials: {exc}") from exc

    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


class GoogleSheetsClient:
    """
    Cliente de lectura de un spreadsheet.

    Importante:
    - No hace cast de celdas: todo se devuelve como string.
    - Cada método hace exactamente una llamada bloqueante a la API.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        account: Optional[GoogleServiceAccount] = None,
        *,
        service: Any = None,
        columns: int = DEFAULT_COLUMNS,
    ) -> None:
        if service is None and account is None:
            raise SyncConfigError("GoogleSheetsClient requires a service account or a service")
        self._spreadsheet_id = spreadsheet_id
        self._columns = columns
        self._service = service or build_sheets_service(account)

    def read_header(self, sheet_name: str) -> list[str]:
        """Retorna la fila de header o [] si el rango viene vacío."""
        values = self._get_values(a1_header_range(sheet_name, columns=self._columns))
        if not values:
            return []
        return [str(cell) for cell in values[0]]

    def get_row_count(self, sheet_name: str) -> int:
        """
        Cantidad total de filas declaradas (gridProperties.rowCount) de la hoja.

        Raises:
            SheetMetadataError: si la hoja no existe en el spreadsheet
        """
        try:
            payload = (
                self._service.spreadsheets()
                .get(
                    spreadsheetId=self._spreadsheet_id,
                    includeGridData=False,
                    fields="sheets.properties",
                )
                .execute()
            )
        except HttpError as exc:
            raise UpstreamFetchError(
                f"Google Sheets metadata request failed ({_http_status(exc)}): {exc}"
            ) from exc
        except Exception as exc:
            raise UpstreamFetchError(f"Google Sheets metadata request failed: {exc}") from exc

        for sheet in payload.get("sheets") or []:
            props = sheet.get("properties") or {}
            if props.get("title") == sheet_name:
                grid = props.get("gridProperties") or {}
                return int(grid.get("rowCount") or 0)

        raise SheetMetadataError(sheet_name)

    def read_rows(self, sheet_name: str, start_row: int, end_row: int) -> list[list[str]]:
        """Lee el bloque [start_row, end_row] (1-based, inclusivo)."""
        values = self._get_values(
            a1_rows_range(sheet_name, start_row, end_row, columns=self._columns)
        )
        return [[str(cell) for cell in row] for row in values]

    def _get_values(self, a1_range: str) -> list[list[Any]]:
        try:
            response = (
                self._service.spreadsheets()
                .values()
                .get(spreadsheetId=self._spreadsheet_id, range=a1_range, majorDimension="ROWS")
                .execute()
            )
        except HttpError as exc:
            raise UpstreamFetchError(
                f"Google Sheets read failed for {a1_range} ({_http_status(exc)}): {exc}"
            ) from exc
        except Exception as exc:
            # Errores de red/auth de httplib2/google-auth no heredan de HttpError
            raise UpstreamFetchError(f"Google Sheets read failed for {a1_range}: {exc}") from exc

        return response.get("values") or []
