# ============================================================================
# src/prescription_analysis/pipeline/safety_analyzer.py
# ============================================================================
"""
Safety Analysis Stage

Structured medications -> SafetyAnalysis (precautions, duration, warnings).

Unlike the extractor, this stage does not recover on its own: provider,
configuration and parse errors propagate out of execute(). The orchestrator
calls it through Stage.run() and chooses the fallback.

After mapping, every list category that is still empty gets exactly one
advisory sentence for that category.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.models import (
    DurationInfo,
    Precautions,
    SafetyAnalysis,
    StructuredMedication,
    Warnings,
)
from ..core.stage import Stage
from ..llm.base import BaseLLMClient, LLMTask
from ..llm.prompts import build_safety_prompt
from ..parsing.response_parser import parse_json_response
from ..validators.field_validators import validate_duration
from .fallbacks import (
    ANALYZER_DEFAULT_FREQUENCY,
    ANALYZER_DEFAULT_TIMING,
    ANALYZER_DEFAULTS,
)

MedicationInput = Union[StructuredMedication, Dict[str, Any]]


class SafetyAnalyzer(Stage[SafetyAnalysis]):
    """Asks the LLM for safety information about a medication list."""

    def __init__(self, llm_client: BaseLLMClient, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.llm = llm_client

    def get_name(self) -> str:
        return "SafetyAnalyzer"

    async def analyze(self, medications: Sequence[MedicationInput]) -> SafetyAnalysis:
        return await self.execute(medications)

    async def execute(self, medications: Sequence[MedicationInput]) -> SafetyAnalysis:
        med_dicts = [
            med.to_dict() if isinstance(med, StructuredMedication) else dict(med)
            for med in (medications or [])
        ]
        self.logger.info(f"Analyzing safety for {len(med_dicts)} medication(s)")

        completion = await self.llm.complete(
            build_safety_prompt(med_dicts),
            LLMTask.SAFETY_ANALYSIS,
        )
        payload = parse_json_response(completion, marker_field="precautions")

        analysis = self._map_payload(payload)
        self._fill_empty_categories(analysis)
        return analysis

    def _map_payload(self, payload: Dict[str, Any]) -> SafetyAnalysis:
        precautions = _section(payload, "precautions")
        duration = _section(payload, "duration")
        warnings = _section(payload, "warnings")

        return SafetyAnalysis(
            precautions=Precautions(
                dietary_restrictions=_string_list(precautions.get("dietary_restrictions")),
                activity_limitations=_string_list(precautions.get("activity_limitations")),
                side_effects=_string_list(precautions.get("side_effects")),
            ),
            duration=DurationInfo(
                total_days=validate_duration(duration.get("total_days")),
                frequency=_scalar(duration.get("frequency"), ANALYZER_DEFAULT_FREQUENCY),
                timing=_scalar(duration.get("timing"), ANALYZER_DEFAULT_TIMING),
            ),
            warnings=Warnings(
                drug_interactions=_string_list(warnings.get("drug_interactions")),
                contraindications=_string_list(warnings.get("contraindications")),
                overdose_symptoms=_string_list(warnings.get("overdose_symptoms")),
            ),
        )

    def _fill_empty_categories(self, analysis: SafetyAnalysis) -> None:
        for group in (analysis.precautions, analysis.warnings):
            for field_name, default in ANALYZER_DEFAULTS.items():
                if hasattr(group, field_name) and not getattr(group, field_name):
                    self.logger.debug(f"No {field_name} from LLM, using default advisory")
                    setattr(group, field_name, [default])


def _section(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _scalar(value: Any, default: str) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default
