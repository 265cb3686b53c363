"""
Endpoints de autenticación.

El login (Google OAuth) lo hace el frontend directamente contra Supabase;
el backend solo valida el access token resultante.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from sheets_dialer.api.v1.dependencies.auth_deps import get_current_user
from sheets_dialer.application.dto.auth_dto import SessionUserDTO


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get(
    "/me",
    response_model=SessionUserDTO,
    summary="Usuario de la sesion actual",
)
async def me(user: SessionUserDTO = Depends(get_current_user)) -> SessionUserDTO:
    return user
