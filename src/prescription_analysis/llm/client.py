# ============================================================================
# src/prescription_analysis/llm/client.py
# ============================================================================
"""
LLM Client Factory

Usage:
    from prescription_analysis.llm.client import create_client

    client = create_client()                       # settings from env/.env
    client = create_client({'groq_api_key': '...'})  # explicit override

    text = await client.complete("...", LLMTask.EXTRACTION)

Configuration is loaded from LLMSettings and merged with any passed config.
Passed config values take precedence. The application context owns the
returned client and closes it at shutdown.
"""

from typing import Any, Dict, Optional
import logging

from .base import BaseLLMClient
from .groq_client import GroqChatClient
from ..config.llm_config import LLMSettings


_logger = logging.getLogger(__name__)


def create_client(config: Optional[Dict[str, Any]] = None) -> BaseLLMClient:
    """
    Create a chat-completion client.

    Args:
        config: Optional overrides (lower-case LLMSettings field names)

    Returns:
        Configured client instance
    """
    env_config = LLMSettings().to_dict()
    merged = {**env_config, **(config or {})}
    _logger.debug(f"Creating chat client for model {merged.get('llm_model')}")
    return GroqChatClient(merged)
