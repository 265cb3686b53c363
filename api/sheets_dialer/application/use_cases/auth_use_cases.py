"""
Casos de uso para autenticacion.

Caso principal en este proyecto:
- validar el token de sesion emitido por Supabase (login con Google).
"""

from __future__ import annotations

import asyncio
from typing import Optional

from sheets_dialer.application.dto.auth_dto import SessionUserDTO
from sheets_dialer.infrastructure.security.supabase_auth_service import SupabaseAuthService


class AuthUseCases:
    def __init__(self, auth_service: SupabaseAuthService) -> None:
        self._auth_service = auth_service

    def is_configured(self) -> bool:
        return self._auth_service.is_configured()

    async def get_session_user(self, token: str) -> Optional[SessionUserDTO]:
        user = await asyncio.to_thread(self._auth_service.verify_session, token)
        if not user:
            return None

        metadata = user.get("user_metadata") or {}
        return SessionUserDTO(
            id=str(user["id"]),
            email=user.get("email"),
            full_name=metadata.get("full_name"),
            avatar_url=metadata.get("avatar_url"),
        )
