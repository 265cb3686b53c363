"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.

Las credenciales de Google y Supabase no son obligatorias para levantar el API:
si faltan, se reporta en el startup y el sync falla al construirse.
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno (o .env) y proporciona valores por defecto.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Sheets Dialer API")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Google Sheets (service account con acceso "Viewer" a la hoja)
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str = Field(default="")
    # La key suele venir con '\n' literales; se restauran al construir el cliente
    GOOGLE_PRIVATE_KEY: str = Field(default="")
    GOOGLE_SHEET_ID: str = Field(default="")

    # Supabase
    SUPABASE_URL: str = Field(default="")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(default="")
    SUPABASE_ANON_KEY: str = Field(default="")
    SUPABASE_LEADS_TABLE: str = Field(default="leads")

    # Sync
    SYNC_SHEET_NAME: str = Field(default="Sheet1")
    SYNC_BATCH_SIZE: int = Field(default=50)
    HTTP_TIMEOUT_S: int = Field(default=30)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    def missing_sync_settings(self) -> List[str]:
        """Nombres de las variables requeridas por el sync que estan vacias."""
        required = {
            "GOOGLE_SERVICE_ACCOUNT_EMAIL": self.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            "GOOGLE_PRIVATE_KEY": self.GOOGLE_PRIVATE_KEY,
            "GOOGLE_SHEET_ID": self.GOOGLE_SHEET_ID,
            "SUPABASE_URL": self.SUPABASE_URL,
            "SUPABASE_SERVICE_ROLE_KEY": self.SUPABASE_SERVICE_ROLE_KEY,
        }
        return [name for name, value in required.items() if not value]

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
