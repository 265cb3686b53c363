"""
Middleware para errores no manejados.

Las AppException ya las resuelve el exception handler de main.py; aca solo
llegan errores inesperados (bugs, fallos de librerias), que se registran con
la ruta y se devuelven como 500 genérico.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger

from sheets_dialer.shared.exceptions.base import AppException


_INTERNAL_ERROR = AppException("Ha ocurrido un error interno del servidor")


class ErrorHandlerMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            # Escapar llaves para evitar error de formato en loguru
            error_msg = str(exc).replace("{", "{{").replace("}", "}}")
            logger.error(f"Error no manejado en {request.method} {request.url.path}: {error_msg}")

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=_INTERNAL_ERROR.to_dict(),
            )
