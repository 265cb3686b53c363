"""
Tests unitarios para LeadUseCases y SheetsSyncUseCases.
"""
from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from sheets_dialer.application.use_cases import sync_use_cases as sync_use_cases_module
from sheets_dialer.application.use_cases.lead_use_cases import LeadUseCases
from sheets_dialer.application.use_cases.sync_use_cases import SheetsSyncUseCases
from sheets_dialer.infrastructure.external.sheets_sync.errors import LeadStoreError
from sheets_dialer.infrastructure.external.sheets_sync.supabase_repository import (
    LeadPage,
    SupabaseCredentials,
    SupabaseLeadRepository,
)
from sheets_dialer.infrastructure.external.sheets_sync.sync_config import SyncOptions
from sheets_dialer.shared.exceptions.domain import EntityNotFoundException, LeadStoreUnavailableException


def _row(row_id: str, **extra) -> dict:
    return {"id": f"uuid-{row_id}", "sheet_row_id": row_id, "last_sync": "2025-01-15T12:30:00+00:00", **extra}


@pytest.mark.asyncio
async def test_list_leads_computes_total_pages() -> None:
    repo = MagicMock()
    repo.list_leads.return_value = LeadPage(
        items=[_row("2", name="Alice", lead_score="7")], total_count=21, page=1, page_size=10
    )

    page = await LeadUseCases(repo).list_leads(page=1, page_size=10)

    assert page.total_pages == 3
    assert page.items[0].name == "Alice"
    # Columnas propias de la hoja se conservan como campos extra
    assert page.items[0].model_dump()["lead_score"] == "7"
    repo.list_leads.assert_called_once_with(page=1, page_size=10)


@pytest.mark.asyncio
async def test_list_leads_empty_table_has_zero_pages() -> None:
    repo = MagicMock()
    repo.list_leads.return_value = LeadPage(items=[], total_count=0, page=1, page_size=10)

    page = await LeadUseCases(repo).list_leads(page=1, page_size=10)

    assert page.total_pages == 0
    assert page.items == []


@pytest.mark.asyncio
async def test_store_failure_is_translated() -> None:
    repo = MagicMock()
    repo.list_leads.side_effect = LeadStoreError("Supabase read failed 500: boom")

    with pytest.raises(LeadStoreUnavailableException) as exc_info:
        await LeadUseCases(repo).list_leads(page=1, page_size=10)
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_get_lead_not_found() -> None:
    repo = MagicMock()
    repo.get_lead.return_value = None

    with pytest.raises(EntityNotFoundException) as exc_info:
        await LeadUseCases(repo).get_lead("nope")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_last_sync() -> None:
    repo = MagicMock()
    repo.get_last_sync_timestamp.return_value = "1970-01-01T00:00:00Z"

    result = await LeadUseCases(repo).get_last_sync()

    assert result.last_sync == "1970-01-01T00:00:00Z"


def _settings() -> SimpleNamespace:
    return SimpleNamespace(SYNC_SHEET_NAME="Leads", SYNC_BATCH_SIZE=25)


def test_sync_default_options_come_from_settings() -> None:
    options = SheetsSyncUseCases(_settings()).default_options()

    assert options.sheet_name == "Leads"
    assert options.batch_size == 25


@pytest.mark.asyncio
async def test_sync_run_builds_pipeline_and_runs_once(monkeypatch) -> None:
    service = MagicMock()
    service.run_sync.return_value = "result"
    build = MagicMock(return_value=(service, None, None))
    monkeypatch.setattr(sync_use_cases_module, "build_from_settings", build)

    settings = _settings()
    result = await SheetsSyncUseCases(settings).run_sync()

    assert result == "result"
    build.assert_called_once_with(settings)
    options: SyncOptions = service.run_sync.call_args.args[0]
    assert options.sheet_name == "Leads"


@pytest.mark.asyncio
async def test_malformed_lead_id_is_not_found() -> None:
    class _Response:
        status_code = 400
        headers: dict = {}
        text = '{"code":"22P02"}'

        def json(self):
            return {"code": "22P02"}

    session = MagicMock()
    session.request.return_value = _Response()
    repo = SupabaseLeadRepository(
        SupabaseCredentials(url="https://proj.supabase.co", key="anon-key"), session=session
    )

    with pytest.raises(EntityNotFoundException) as exc_info:
        await LeadUseCases(repo).get_lead("abc")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_page_past_the_end_is_empty_not_an_error() -> None:
    repo = MagicMock()
    repo.list_leads.return_value = LeadPage(items=[], total_count=10, page=5, page_size=10)

    page = await LeadUseCases(repo).list_leads(page=5, page_size=10)

    assert page.items == []
    assert page.total_pages == 1
