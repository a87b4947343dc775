# ============================================================================
# src/prescription_analysis/__init__.py
# ============================================================================
"""
Prescription analysis service.

Turns prescription text (typed or read from a photo) into a structured
medication list and a patient-facing safety analysis, backed by an external
LLM provider with canned fallbacks at every failure point.
"""

__version__ = "1.0.0"
