# ============================================================================
# src/prescription_analysis/llm/__init__.py
# ============================================================================
"""
LLM gateway - chat-completion clients and prompt builders
"""

from .base import BaseLLMClient, LLMTask, TaskProfile
from .groq_client import GroqChatClient
from .client import create_client

__all__ = [
    "BaseLLMClient",
    "LLMTask",
    "TaskProfile",
    "GroqChatClient",
    "create_client",
]
