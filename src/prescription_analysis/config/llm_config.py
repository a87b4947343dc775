# ============================================================================
# src/prescription_analysis/config/llm_config.py
# ============================================================================
"""
LLM Provider Configuration
- API key and endpoint
- Text and vision model identifiers
- Per-task sampling temperature and token ceilings
- Request timeout
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    GROQ_API_KEY: str = Field(
        default="",
        description="API key for the chat-completion provider"
    )
    LLM_BASE_URL: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible API root (chat/completions is appended)"
    )
    LLM_MODEL: str = Field(
        default="llama3-8b-8192",
        description="Model used for extraction, safety analysis and chat"
    )
    VISION_MODEL: str = Field(
        default="meta-llama/llama-4-scout-17b-16e-instruct",
        description="Vision model used to read prescription photos"
    )

    EXTRACTION_TEMPERATURE: float = Field(default=0.2)
    EXTRACTION_MAX_TOKENS: int = Field(default=1024)
    SAFETY_TEMPERATURE: float = Field(default=0.3)
    SAFETY_MAX_TOKENS: int = Field(default=2048)
    CHAT_TEMPERATURE: float = Field(default=0.2)
    CHAT_MAX_TOKENS: int = Field(default=256)
    VISION_TEMPERATURE: float = Field(default=0.1)
    VISION_MAX_TOKENS: int = Field(default=4096)

    LLM_TIMEOUT: Optional[float] = Field(
        default=None,
        description="Total request timeout in seconds (None = HTTP client default)"
    )

    def is_configured(self) -> bool:
        return bool(self.GROQ_API_KEY)

    def to_dict(self) -> dict:
        """Flatten into the lower-case config dict the components accept."""
        return {key.lower(): value for key, value in self.model_dump().items()}


# Global instance
llm_settings = LLMSettings()
