# ============================================================================
# src/prescription_analysis/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings

The project-root .env is loaded into the process environment before any
settings object is built, so the service picks it up regardless of the
working directory it was started from.
"""

from pathlib import Path

from dotenv import load_dotenv


def _load_dotenv() -> bool:
    """Load .env from the project root, then the current directory."""
    for env_path in (
        Path(__file__).resolve().parents[3] / ".env",
        Path.cwd() / ".env",
    ):
        if env_path.exists():
            load_dotenv(env_path)
            return True
    return False


_load_dotenv()

from .llm_config import LLMSettings, llm_settings  # noqa: E402
from .server_config import ServerSettings, server_settings  # noqa: E402
from .logging_config import LoggingSettings, logging_settings  # noqa: E402

__all__ = [
    "LLMSettings",
    "llm_settings",
    "ServerSettings",
    "server_settings",
    "LoggingSettings",
    "logging_settings",
]
