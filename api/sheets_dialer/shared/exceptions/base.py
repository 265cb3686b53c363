"""
Excepción base del API.

El handler global de main.py la serializa con to_dict(); el middleware de
errores usa el mismo formato para los errores no manejados.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Error con código HTTP y código de error estable para el frontend.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Cuerpo JSON de la respuesta de error."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
