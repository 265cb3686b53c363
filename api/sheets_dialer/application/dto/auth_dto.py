"""
DTOs de autenticacion.
"""
from typing import Optional
from pydantic import BaseModel


class SessionUserDTO(BaseModel):
    """Usuario autenticado segun Supabase Auth."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
