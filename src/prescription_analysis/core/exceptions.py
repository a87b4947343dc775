# ============================================================================
# src/prescription_analysis/core/exceptions.py
# ============================================================================
"""
Custom exceptions for the prescription analysis service.
"""


class PrescriptionAnalysisError(Exception):
    """Base exception for all prescription analysis errors."""
    pass


class ConfigurationError(PrescriptionAnalysisError):
    """Required configuration (e.g. the provider API key) is missing."""
    pass


class GatewayError(PrescriptionAnalysisError):
    """The LLM provider call failed (network, timeout, non-2xx, bad envelope)."""
    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class ResponseParseError(PrescriptionAnalysisError):
    """No JSON object could be recovered from the LLM reply."""
    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class InputValidationError(PrescriptionAnalysisError):
    """Request input is missing or malformed."""
    pass


class ImageExtractionError(PrescriptionAnalysisError):
    """Reading text from a prescription image failed."""
    pass
