"""
Tests unitarios para los endpoints del dashboard (/api/v1/leads, /auth/me, /sync-sheets/status).

Verifica:
- Sin token o con token inválido responde 401.
- Paginación y detalle delegan en LeadUseCases.
- Lead inexistente responde 404.
"""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from sheets_dialer.api.v1.dependencies.auth_deps import get_auth_use_cases, get_current_user
from sheets_dialer.api.v1.dependencies.use_case_deps import get_lead_use_cases
from sheets_dialer.application.dto.auth_dto import SessionUserDTO
from sheets_dialer.application.dto.lead_dto import LastSyncDTO, LeadDTO, LeadPageDTO
from sheets_dialer.shared.exceptions.domain import EntityNotFoundException

_USER = SessionUserDTO(id="user-1", email="ana@x.com", full_name="Ana")


def _lead(row_id: str, name: str) -> LeadDTO:
    return LeadDTO(id=f"uuid-{row_id}", sheet_row_id=row_id, last_sync="2025-01-15T12:30:00+00:00", name=name)


@pytest.fixture
def mock_use_cases() -> AsyncMock:
    uc = AsyncMock()
    uc.list_leads = AsyncMock(
        return_value=LeadPageDTO(
            items=[_lead("3", "Bob"), _lead("2", "Alice")],
            page=1,
            page_size=10,
            total_count=2,
            total_pages=1,
        )
    )
    uc.get_lead = AsyncMock(return_value=_lead("2", "Alice"))
    uc.get_last_sync = AsyncMock(return_value=LastSyncDTO(last_sync="2025-01-15T12:30:00+00:00"))
    return uc


@pytest.fixture
def app_with_mock(mock_use_cases: AsyncMock):
    from main import create_application
    app = create_application()
    app.dependency_overrides[get_lead_use_cases] = lambda: mock_use_cases
    app.dependency_overrides[get_current_user] = lambda: _USER
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def app_without_session(mock_use_cases: AsyncMock):
    """App con la validación de sesión real pero Supabase Auth mockeado."""
    from main import create_application
    auth_uc = MagicMock()
    auth_uc.is_configured = MagicMock(return_value=True)
    auth_uc.get_session_user = AsyncMock(return_value=None)

    app = create_application()
    app.dependency_overrides[get_lead_use_cases] = lambda: mock_use_cases
    app.dependency_overrides[get_auth_use_cases] = lambda: auth_uc
    yield app
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_list_leads_returns_page(app_with_mock, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads")

    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data["items"]] == ["Bob", "Alice"]
    assert data["total_pages"] == 1
    mock_use_cases.list_leads.assert_awaited_once_with(page=1, page_size=10)


@pytest.mark.asyncio
async def test_list_leads_forwards_paging(app_with_mock, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads", params={"page": 3, "page_size": 25})

    assert response.status_code == 200
    mock_use_cases.list_leads.assert_awaited_once_with(page=3, page_size=25)


@pytest.mark.asyncio
async def test_list_leads_rejects_page_size_over_limit(app_with_mock, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads", params={"page_size": 101})

    assert response.status_code == 422
    mock_use_cases.list_leads.assert_not_called()


@pytest.mark.asyncio
async def test_get_lead_returns_detail(app_with_mock, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads/uuid-2")

    assert response.status_code == 200
    assert response.json()["sheet_row_id"] == "2"
    mock_use_cases.get_lead.assert_awaited_once_with("uuid-2")


@pytest.mark.asyncio
async def test_get_unknown_lead_returns_404(app_with_mock, mock_use_cases: AsyncMock) -> None:
    mock_use_cases.get_lead.side_effect = EntityNotFoundException("Lead", "nope")
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "ENTITY_NOT_FOUND"


@pytest.mark.asyncio
async def test_sync_status_returns_last_sync(app_with_mock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/sync-sheets/status")

    assert response.status_code == 200
    assert response.json() == {"last_sync": "2025-01-15T12:30:00+00:00"}


@pytest.mark.asyncio
async def test_auth_me_returns_session_user(app_with_mock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/auth/me")

    assert response.status_code == 200
    assert response.json()["email"] == "ana@x.com"


@pytest.mark.asyncio
async def test_missing_token_returns_401(app_without_session, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_without_session)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads")

    assert response.status_code == 401
    assert response.json()["error"] == "MISSING_TOKEN"
    mock_use_cases.list_leads.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_token_returns_401(app_without_session, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_without_session)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/leads", headers={"Authorization": "Bearer expired"})

    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_SESSION"
    mock_use_cases.list_leads.assert_not_called()
