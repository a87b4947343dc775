# ============================================================================
# src/prescription_analysis/pipeline/orchestrator.py
# ============================================================================
"""
Analysis Orchestrator

Sequences the pipeline for one request:

    1. MedicationExtractor   (never raises)
    2. no medications?       -> basic analysis
    3. SafetyAnalyzer.run()  (tagged result)
    4. analyzer failed?      -> basic analysis
    5. fill any blank field with the basic defaults and return

Two independent fallback tiers mean the caller always receives a well-formed
SafetyAnalysis, even if the LLM provider is completely unavailable. There is
no retry: one attempt per LLM call, then fallback.
"""

from typing import Any, Dict, Optional
import logging

from ..core.models import ExtractionResult, SafetyAnalysis
from ..llm.base import BaseLLMClient
from .fallbacks import BASIC_DEFAULTS, basic_safety_analysis
from .medication_extractor import MedicationExtractor
from .safety_analyzer import SafetyAnalyzer
from ..utils.text_normalizer import normalize_prescription_text
from ..validators.field_validators import DEFAULT_FREQUENCY, DEFAULT_TIMING


class AnalysisOrchestrator:
    """Runs extraction then safety analysis with fallbacks."""

    def __init__(
        self,
        llm_client: BaseLLMClient,
        config: Optional[Dict[str, Any]] = None,
        extractor: Optional[MedicationExtractor] = None,
        analyzer: Optional[SafetyAnalyzer] = None,
    ):
        self.config = config or {}
        self.logger = logging.getLogger(__name__)
        self.extractor = extractor or MedicationExtractor(llm_client, self.config)
        self.analyzer = analyzer or SafetyAnalyzer(llm_client, self.config)

    async def preprocess(self, raw_text: str) -> ExtractionResult:
        """Structured medication list only (no safety analysis)."""
        return await self._extract(raw_text)

    async def analyze(self, raw_text: str) -> SafetyAnalysis:
        extraction = await self._extract(raw_text)

        if extraction.medication_count == 0:
            self.logger.info(
                "No medications found (ai_processed=%s), returning basic analysis",
                extraction.is_ai_processed,
            )
            return basic_safety_analysis()

        result = await self.analyzer.run(extraction.structured_text.medications)

        if not result.ok:
            self.logger.error(
                f"Safety analysis failed ({result.error_type}: {result.reason}), "
                "returning basic analysis"
            )
            return basic_safety_analysis()

        return self._finalize(result.value)

    async def _extract(self, raw_text: str) -> ExtractionResult:
        result = await self.extractor.run(raw_text)
        if result.ok:
            return result.value
        return ExtractionResult.degraded(normalize_prescription_text(raw_text))

    def _finalize(self, analysis: SafetyAnalysis) -> SafetyAnalysis:
        for group in (analysis.precautions, analysis.warnings):
            for field_name, default in BASIC_DEFAULTS.items():
                if hasattr(group, field_name) and not getattr(group, field_name):
                    setattr(group, field_name, [default])

        if not analysis.duration.frequency:
            analysis.duration.frequency = DEFAULT_FREQUENCY
        if not analysis.duration.timing:
            analysis.duration.timing = DEFAULT_TIMING

        return analysis

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "extractor": self.extractor.get_metrics(),
            "analyzer": self.analyzer.get_metrics(),
        }
