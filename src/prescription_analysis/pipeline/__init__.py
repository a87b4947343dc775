# ============================================================================
# src/prescription_analysis/pipeline/__init__.py
# ============================================================================
"""
Prescription analysis pipeline: extractor -> safety analyzer, with fallbacks.
"""

from .fallbacks import basic_safety_analysis
from .medication_extractor import MedicationExtractor
from .safety_analyzer import SafetyAnalyzer
from .orchestrator import AnalysisOrchestrator

__all__ = [
    "basic_safety_analysis",
    "MedicationExtractor",
    "SafetyAnalyzer",
    "AnalysisOrchestrator",
]
