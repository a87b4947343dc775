# ============================================================================
# src/prescription_analysis/core/__init__.py
# ============================================================================
"""
Core components shared by the analysis pipeline.
"""

from .exceptions import (
    PrescriptionAnalysisError,
    ConfigurationError,
    GatewayError,
    ResponseParseError,
    InputValidationError,
    ImageExtractionError,
)
from .models import (
    StructuredMedication,
    StructuredText,
    ExtractionResult,
    Precautions,
    DurationInfo,
    Warnings,
    SafetyAnalysis,
)
from .stage import Stage, StageResult

__all__ = [
    "PrescriptionAnalysisError",
    "ConfigurationError",
    "GatewayError",
    "ResponseParseError",
    "InputValidationError",
    "ImageExtractionError",
    "StructuredMedication",
    "StructuredText",
    "ExtractionResult",
    "Precautions",
    "DurationInfo",
    "Warnings",
    "SafetyAnalysis",
    "Stage",
    "StageResult",
]
