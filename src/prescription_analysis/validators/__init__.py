# ============================================================================
# src/prescription_analysis/validators/__init__.py
# ============================================================================

from .field_validators import (
    DEFAULT_FREQUENCY,
    DEFAULT_TIMING,
    validate_frequency,
    validate_timing,
    validate_duration,
)

__all__ = [
    "DEFAULT_FREQUENCY",
    "DEFAULT_TIMING",
    "validate_frequency",
    "validate_timing",
    "validate_duration",
]
