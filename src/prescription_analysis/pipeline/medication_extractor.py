# ============================================================================
# src/prescription_analysis/pipeline/medication_extractor.py
# ============================================================================
"""
Medication Extraction Stage

Raw prescription text -> structured medication list.

    normalize -> extraction prompt -> LLM -> JSON parse -> field validation

This stage never raises. A missing API key, a provider failure or an
unparseable reply all degrade to "no medications recognized" with
isAiProcessed=False, so callers can always continue.
"""

from typing import Any, Dict, List, Optional

from ..core.exceptions import ConfigurationError, GatewayError, ResponseParseError
from ..core.models import ExtractionResult, StructuredMedication, StructuredText
from ..core.stage import Stage
from ..llm.base import BaseLLMClient, LLMTask
from ..llm.prompts import build_extraction_prompt
from ..parsing.response_parser import parse_json_response
from ..utils.text_normalizer import normalize_prescription_text
from ..validators.field_validators import (
    validate_duration,
    validate_frequency,
    validate_timing,
)


class MedicationExtractor(Stage[ExtractionResult]):
    """Extracts a validated medication list from prescription text."""

    def __init__(self, llm_client: BaseLLMClient, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.llm = llm_client

    def get_name(self) -> str:
        return "MedicationExtractor"

    async def extract(self, raw_text: str) -> ExtractionResult:
        return await self.execute(raw_text)

    async def execute(self, raw_text: str) -> ExtractionResult:
        cleaned_text = normalize_prescription_text(raw_text)
        self.logger.info(f"Extracting medications from {len(cleaned_text)} chars of text")

        try:
            completion = await self.llm.complete(
                build_extraction_prompt(cleaned_text),
                LLMTask.EXTRACTION,
            )
            payload = parse_json_response(completion, marker_field="medications")
        except ConfigurationError as e:
            self.logger.warning(f"{e}. Returning text without AI extraction.")
            return ExtractionResult.degraded(cleaned_text)
        except (GatewayError, ResponseParseError) as e:
            self.logger.error(f"Medication extraction failed: {type(e).__name__}: {e}")
            return ExtractionResult.degraded(cleaned_text)
        except Exception:
            self.logger.exception("Unexpected error during medication extraction")
            return ExtractionResult.degraded(cleaned_text)

        medications = self._validate_medications(payload.get("medications"))
        self.logger.info(f"Parsed {len(medications)} medication(s)")

        return ExtractionResult(
            structured_text=StructuredText(text=cleaned_text, medications=medications),
            medication_count=len(medications),
            is_ai_processed=True,
        )

    def _validate_medications(self, entries: Any) -> List[StructuredMedication]:
        if not isinstance(entries, list):
            return []

        medications = []
        for entry in entries:
            if not isinstance(entry, dict):
                self.logger.debug(f"Skipping non-object medication entry: {entry!r}")
                continue
            medications.append(StructuredMedication(
                name=_text(entry.get("name")),
                dosage=_text(entry.get("dosage")),
                frequency=validate_frequency(entry.get("frequency")),
                duration=validate_duration(entry.get("duration")),
                special_instructions=validate_timing(entry.get("specialInstructions")),
            ))
        return medications


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
