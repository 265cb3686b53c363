"""
Validación de sesiones contra Supabase Auth (GoTrue).

IMPORTANTE:
- Este servicio solo valida tokens emitidos por Supabase (login con Google).
- El flujo OAuth / redirects vive en el frontend.
"""

from __future__ import annotations

from typing import Any, Optional

import requests
from loguru import logger


class SupabaseAuthService:
    """
    Verifica un access token llamando a GET {SUPABASE_URL}/auth/v1/user.

    Cualquier respuesta != 2xx (o error de red) se trata como sesión inválida.
    """

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
    ) -> None:
        self._base_url = (supabase_url or "").rstrip("/")
        self._anon_key = anon_key or ""
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def is_configured(self) -> bool:
        return bool(self._base_url and self._anon_key)

    def verify_session(self, token: str) -> Optional[dict[str, Any]]:
        """
        Retorna el usuario asociado al token, o None si no es válido.
        """
        if not self.is_configured() or not token:
            return None

        try:
            resp = self._session.request(
                method="GET",
                url=f"{self._base_url}/auth/v1/user",
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {token}",
                },
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            logger.error(f"Error verificando sesion en Supabase: {e}")
            return None

        if not 200 <= resp.status_code < 300:
            logger.warning(f"Session verification failed: {resp.status_code}")
            return None

        user = resp.json()
        if not user or not user.get("id"):
            return None
        return user
