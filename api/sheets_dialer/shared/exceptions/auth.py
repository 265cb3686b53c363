"""
Excepciones relacionadas con autenticación.
"""
from sheets_dialer.shared.exceptions.base import AppException


class AuthException(AppException):
    """Excepción base para errores de autenticación."""

    def __init__(self, message: str, error_code: str = "AUTH_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details
        )


class MissingTokenException(AuthException):
    """La request no trae header Authorization: Bearer <token>."""

    def __init__(self):
        super().__init__(
            message="Falta el token de sesion",
            error_code="MISSING_TOKEN"
        )


class InvalidSessionException(AuthException):
    """El proveedor de identidad no reconoce el token."""

    def __init__(self):
        super().__init__(
            message="Sesion invalida o expirada",
            error_code="INVALID_SESSION"
        )


class AuthNotConfiguredException(AppException):
    """SUPABASE_URL / SUPABASE_ANON_KEY vacíos: no se pueden validar sesiones."""

    def __init__(self):
        super().__init__(
            message="Auth no configurado (SUPABASE_URL/SUPABASE_ANON_KEY vacios)",
            status_code=503,
            error_code="AUTH_NOT_CONFIGURED"
        )
