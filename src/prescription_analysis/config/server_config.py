# ============================================================================
# src/prescription_analysis/config/server_config.py
# ============================================================================
"""
HTTP Server Settings
- Bind address
- CORS origins
- Upload limits
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENVIRONMENT: str = Field(
        default="development",
        description="development | production"
    )
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Origins allowed to call the API from a browser"
    )
    MAX_UPLOAD_BYTES: int = Field(
        default=5 * 1024 * 1024,
        description="Largest prescription image accepted by extract-text"
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


server_settings = ServerSettings()
