# ============================================================================
# src/prescription_analysis/parsing/__init__.py
# ============================================================================

from .response_parser import parse_json_response

__all__ = ["parse_json_response"]
