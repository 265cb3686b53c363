"""
Repositorio Supabase (PostgREST sobre requests) para la tabla de leads:
- UPSERT masivo por sheet_row_id
- lectura paginada/ordenada para el dashboard
- lectura puntual por id
- último last_sync registrado

Se habla directo con /rest/v1 (sin SDK): un solo POST por UPSERT, de modo que
Supabase aplica o rechaza el lote completo.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import requests
from loguru import logger

from .errors import LeadStoreError, StoreWriteError
from .types import LeadRecord

EPOCH_ISO = datetime(1970, 1, 1, tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")

# Código Postgres de PostgREST para "invalid input syntax" (ej: uuid mal formado)
INVALID_TEXT_REPRESENTATION = "22P02"


@dataclass(frozen=True)
class SupabaseCredentials:
    url: str
    key: str


@dataclass(frozen=True)
class LeadPage:
    """Página de leads ordenada por last_sync desc."""

    items: list[dict[str, Any]]
    total_count: int
    page: int
    page_size: int


def parse_content_range_total(content_range: Optional[str]) -> Optional[int]:
    """
    Extrae el total de un header Content-Range de PostgREST.

    Ej: "0-9/57" -> 57, "*/0" -> 0, "0-9/*" -> None
    """
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        return None
    return int(total)


def _error_code(resp: requests.Response) -> Optional[str]:
    try:
        body = resp.json()
    except ValueError:
        return None
    return body.get("code") if isinstance(body, dict) else None


class SupabaseLeadRepository:
    """
    Acceso a la tabla de leads vía PostgREST.

    Importante:
    - La key puede ser service_role (sync) o anon (lectura con RLS).
    - Con anon key se pasa el access_token del usuario para que RLS lo vea
      como "authenticated".
    - La tabla debe tener UNIQUE(sheet_row_id) para que on_conflict funcione.
    """

    def __init__(
        self,
        credentials: SupabaseCredentials,
        *,
        table: str = "leads",
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
    ) -> None:
        self._creds = credentials
        self._access_token = access_token
        self._table = table
        self._base_url = credentials.url.rstrip("/")
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def _headers(self, *, prefer: Optional[str] = None) -> dict[str, str]:
        headers = {
            "apikey": self._creds.key,
            "Authorization": f"Bearer {self._access_token or self._creds.key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _table_url(self) -> str:
        return f"{self._base_url}/rest/v1/{self._table}"

    def upsert_leads(self, leads: Iterable[LeadRecord], *, conflict_column: str = "sheet_row_id") -> int:
        """
        UPSERT de todos los leads en una sola request.

        PostgREST resuelve el conflicto sobre `conflict_column` sobrescribiendo
        la fila existente (merge-duplicates). No se pide el resultado de vuelta.

        Returns:
            Cantidad de leads enviados

        Raises:
            StoreWriteError: si la request falla o Supabase responde != 2xx
        """
        rows = [lead.to_row() for lead in leads]
        if not rows:
            return 0

        try:
            resp = self._session.request(
                method="POST",
                url=self._table_url(),
                params={"on_conflict": conflict_column},
                json=rows,
                headers=self._headers(prefer="resolution=merge-duplicates,return=minimal"),
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            raise StoreWriteError(f"Supabase upsert request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise StoreWriteError(f"Supabase upsert failed {resp.status_code}: {resp.text}")

        return len(rows)

    def list_leads(self, *, page: int = 1, page_size: int = 10) -> LeadPage:
        """
        Página `page` (1-based) de leads, más recientes primero.
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be >= 1")

        offset = (page - 1) * page_size
        resp = self._get(
            params={
                "select": "*",
                "order": "last_sync.desc",
                "offset": offset,
                "limit": page_size,
            },
            prefer="count=exact",
            allow_status=(416,),
        )
        total = parse_content_range_total(resp.headers.get("Content-Range"))
        # 416 (PGRST103): la página pedida está más allá del total
        items = [] if resp.status_code == 416 else (resp.json() or [])
        return LeadPage(
            items=items,
            total_count=total if total is not None else offset + len(items),
            page=page,
            page_size=page_size,
        )

    def get_lead(self, lead_id: str) -> Optional[dict[str, Any]]:
        resp = self._get(
            params={"select": "*", "id": f"eq.{lead_id}", "limit": 1},
            allow_status=(400,),
        )
        if resp.status_code == 400:
            # 22P02: el id no es un uuid válido, no puede existir en la tabla
            if _error_code(resp) == INVALID_TEXT_REPRESENTATION:
                return None
            raise LeadStoreError(f"Supabase read failed 400: {resp.text}")
        rows = resp.json() or []
        return rows[0] if rows else None

    def get_last_sync_timestamp(self) -> str:
        """
        last_sync más reciente de la tabla.

        Si la tabla está vacía o la consulta falla, retorna epoch (1970-01-01)
        para que el caller lo trate como "nunca sincronizado".
        """
        try:
            resp = self._get(
                params={"select": "last_sync", "order": "last_sync.desc", "limit": 1}
            )
            rows = resp.json() or []
        except LeadStoreError as exc:
            logger.warning(f"No se pudo leer last_sync desde Supabase: {exc}")
            return EPOCH_ISO

        if not rows or not rows[0].get("last_sync"):
            return EPOCH_ISO
        return str(rows[0]["last_sync"])

    def _get(
        self,
        *,
        params: dict[str, Any],
        prefer: Optional[str] = None,
        allow_status: tuple[int, ...] = (),
    ) -> requests.Response:
        try:
            resp = self._session.request(
                method="GET",
                url=self._table_url(),
                params=params,
                headers=self._headers(prefer=prefer),
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            raise LeadStoreError(f"Supabase read request failed: {exc}") from exc

        if resp.status_code in allow_status:
            return resp
        if not 200 <= resp.status_code < 300:
            raise LeadStoreError(f"Supabase read failed {resp.status_code}: {resp.text}")
        return resp
