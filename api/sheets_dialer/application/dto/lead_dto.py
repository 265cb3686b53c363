"""
DTOs relacionados con leads.
Definen la estructura de datos que consume el dashboard (lista + detalle).
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class LeadDTO(BaseModel):
    """
    DTO para un lead sincronizado desde Google Sheets.

    Las columnas de la tabla dependen del header de la hoja, por eso se
    aceptan campos extra ademas de los conocidos.
    """
    id: Optional[str] = Field(None, description="ID del registro en Supabase")
    sheet_row_id: str = Field(..., description="Fila de origen en la hoja")
    last_sync: Optional[str] = Field(None, description="Inicio de la corrida que escribio el lead")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        extra = "allow"


class LeadPageDTO(BaseModel):
    """Pagina de leads ordenada por last_sync desc."""
    items: List[LeadDTO]
    page: int
    page_size: int
    total_count: int
    total_pages: int


class LastSyncDTO(BaseModel):
    last_sync: str
