# ============================================================================
# src/prescription_analysis/assistant/__init__.py
# ============================================================================

from .health_assistant import HealthAssistant, ContextType, canned_response

__all__ = ["HealthAssistant", "ContextType", "canned_response"]
