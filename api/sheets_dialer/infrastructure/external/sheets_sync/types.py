"""
Tipos y utilidades puras para el pipeline Google Sheets -> Supabase.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

_WHITESPACE_RUN = re.compile(r"\s+")


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normaliza datetime a UTC (aware).

    Los timestamps se serializan siempre en UTC para que `last_sync`
    sea comparable/ordenable en la tabla destino.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def isoformat_utc(dt: datetime) -> str:
    """Serializa datetime a ISO8601 con 'Z' (UTC), con milisegundos."""
    dt_utc = ensure_utc(dt)
    return dt_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_header(header: str) -> str:
    """
    Convierte un header de la hoja en un nombre de campo seguro.

    - minúsculas
    - cada secuencia de espacios en blanco -> un solo '_'

    Ej: "Full Name" -> "full_name"
    """
    return _WHITESPACE_RUN.sub("_", str(header).lower())


@dataclass(frozen=True)
class SheetRow:
    """
    Fila leída de la hoja durante una corrida (no se persiste).

    row_index es la posición absoluta 1-based dentro de la hoja
    (la fila 1 es el header).
    """

    header_row: tuple[str, ...]
    data_row: tuple[str, ...]
    row_index: int


@dataclass
class LeadRecord:
    """
    Registro de lead listo para UPSERT.

    - fields: mapeo ordenado campo_normalizado -> valor (o None si la fila es más
      corta que el header). El esquema lo define el header de cada corrida.
    - sheet_row_id: posición de la fila en la hoja (string). Es la conflict key.
    - last_sync: inicio de la corrida que produjo el registro.
    """

    sheet_row_id: str
    last_sync: datetime
    fields: dict[str, Optional[str]] = field(default_factory=dict)

    def to_row(self) -> dict[str, Any]:
        """Dict plano para la API de Supabase (campos fijos sobre los dinámicos)."""
        row: dict[str, Any] = dict(self.fields)
        row["sheet_row_id"] = self.sheet_row_id
        row["last_sync"] = isoformat_utc(self.last_sync)
        return row
