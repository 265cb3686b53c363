"""
Dependencias de autenticacion (sesion de Supabase via Bearer token).
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sheets_dialer.application.dto.auth_dto import SessionUserDTO
from sheets_dialer.application.use_cases.auth_use_cases import AuthUseCases
from sheets_dialer.core.config import settings
from sheets_dialer.infrastructure.security.supabase_auth_service import SupabaseAuthService
from sheets_dialer.shared.exceptions.auth import (
    AuthNotConfiguredException,
    InvalidSessionException,
    MissingTokenException,
)


_bearer = HTTPBearer(auto_error=False)


def get_auth_use_cases() -> AuthUseCases:
    return AuthUseCases(
        SupabaseAuthService(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            timeout_s=settings.HTTP_TIMEOUT_S,
        )
    )


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)
) -> str:
    """Extrae el access token del header Authorization."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenException()
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_session_token),
    use_cases: AuthUseCases = Depends(get_auth_use_cases),
) -> SessionUserDTO:
    """
    Valida la sesion contra Supabase Auth.

    Raises:
        AuthNotConfiguredException: Si faltan SUPABASE_URL/SUPABASE_ANON_KEY
        InvalidSessionException: Si el token no es valido
    """
    if not use_cases.is_configured():
        raise AuthNotConfiguredException()

    user = await use_cases.get_session_user(token)
    if user is None:
        raise InvalidSessionException()
    return user
