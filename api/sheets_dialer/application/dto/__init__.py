"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .lead_dto import LeadDTO, LeadPageDTO, LastSyncDTO
from .auth_dto import SessionUserDTO

__all__ = [
    "LeadDTO",
    "LeadPageDTO",
    "LastSyncDTO",
    "SessionUserDTO",
]
