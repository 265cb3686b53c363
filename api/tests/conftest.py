"""
Configuración de fixtures para pytest.

Incluye dobles de prueba para Google Sheets (imita la cadena
service.spreadsheets().values().get(...).execute()) y para la tabla de leads.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import httplib2
import pytest
from googleapiclient.errors import HttpError

from sheets_dialer.infrastructure.external.sheets_sync.errors import StoreWriteError
from sheets_dialer.infrastructure.external.sheets_sync.types import LeadRecord


_RANGE_RE = re.compile(r"^'(?P<title>(?:[^']|'')+)'!A(?P<start>\d+):[A-Z]+(?P<end>\d+)$")


class _Request:
    def __init__(self, fn: Callable[[], Any]) -> None:
        self._fn = fn

    def execute(self) -> Any:
        return self._fn()


class FakeSheetsService:
    """
    Doble del recurso `sheets` v4.

    grid: todas las filas de la hoja (la primera es el header).
    fail_on_data_read: número (1-based) de lectura de datos que debe fallar.
    """

    def __init__(
        self,
        grid: list[list[str]],
        *,
        title: str = "Sheet1",
        row_count: Optional[int] = None,
        fail_on_data_read: Optional[int] = None,
    ) -> None:
        self.grid = grid
        self.title = title
        self.row_count = len(grid) if row_count is None else row_count
        self.fail_on_data_read = fail_on_data_read
        self.value_ranges: list[str] = []
        self.metadata_calls = 0
        self._data_reads = 0

    # spreadsheets() y values() devuelven el mismo objeto; get() distingue por kwargs
    def spreadsheets(self) -> "FakeSheetsService":
        return self

    def values(self) -> "FakeSheetsService":
        return self

    def get(self, **kwargs: Any) -> _Request:
        if "range" in kwargs:
            return _Request(lambda: self._values(kwargs["range"]))
        return _Request(self._metadata)

    def _values(self, a1_range: str) -> dict[str, Any]:
        self.value_ranges.append(a1_range)
        match = _RANGE_RE.match(a1_range)
        assert match, f"unexpected range {a1_range}"
        start, end = int(match.group("start")), int(match.group("end"))

        if start >= 2:
            self._data_reads += 1
            if self._data_reads == self.fail_on_data_read:
                raise HttpError(httplib2.Response({"status": 503}), b"backend unavailable")

        rows = self.grid[start - 1:end]
        return {"values": rows} if rows else {}

    def _metadata(self) -> dict[str, Any]:
        self.metadata_calls += 1
        return {
            "sheets": [
                {
                    "properties": {
                        "title": self.title,
                        "gridProperties": {"rowCount": self.row_count, "columnCount": 26},
                    }
                }
            ]
        }


class FakeLeadRepository:
    """
    Tabla de leads en memoria con semántica de UPSERT por sheet_row_id.

    Como merge-duplicates de PostgREST: las columnas ausentes del payload
    conservan su valor previo.
    """

    def __init__(self, *, fail_with: Optional[str] = None) -> None:
        self.fail_with = fail_with
        self.upsert_calls: list[list[LeadRecord]] = []
        self.rows: dict[str, dict[str, Any]] = {}

    def upsert_leads(self, leads, *, conflict_column: str = "sheet_row_id") -> int:
        leads = list(leads)
        self.upsert_calls.append(leads)
        if self.fail_with:
            raise StoreWriteError(self.fail_with)
        for lead in leads:
            row = lead.to_row()
            self.rows.setdefault(row[conflict_column], {}).update(row)
        return len(leads)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def alice_bob_grid() -> list[list[str]]:
    return [
        ["Name", "Email"],
        ["Alice", "a@x.com"],
        ["Bob", "b@x.com"],
    ]


@pytest.fixture
def sheets_service_factory() -> type[FakeSheetsService]:
    """Devuelve la clase del doble para que cada test arme su hoja."""
    return FakeSheetsService


@pytest.fixture
def lead_repo() -> FakeLeadRepository:
    return FakeLeadRepository()
