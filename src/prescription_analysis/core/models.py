# ============================================================================
# src/prescription_analysis/core/models.py
# ============================================================================
"""
Data model for the analysis pipeline.

StructuredMedication -> StructuredText -> ExtractionResult is produced by the
medication extractor; SafetyAnalysis is produced by the safety analyzer or the
orchestrator's fallback. `to_dict()` gives the JSON shape sent to clients.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class StructuredMedication:
    """One medication line recognized in a prescription."""
    name: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: Optional[int] = None  # days
    special_instructions: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "duration": self.duration,
            "specialInstructions": self.special_instructions,
        }


@dataclass
class StructuredText:
    text: str = ""
    medications: List[StructuredMedication] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "medications": [med.to_dict() for med in self.medications],
        }


@dataclass
class ExtractionResult:
    """Output of the medication extractor."""
    structured_text: StructuredText
    medication_count: int = 0
    is_ai_processed: bool = False

    @classmethod
    def degraded(cls, cleaned_text: str) -> "ExtractionResult":
        """Result used whenever AI extraction is unavailable or fails."""
        return cls(
            structured_text=StructuredText(text=cleaned_text, medications=[]),
            medication_count=0,
            is_ai_processed=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "structuredText": self.structured_text.to_dict(),
            "medicationCount": self.medication_count,
            "isAiProcessed": self.is_ai_processed,
        }


@dataclass
class Precautions:
    dietary_restrictions: List[str] = field(default_factory=list)
    activity_limitations: List[str] = field(default_factory=list)
    side_effects: List[str] = field(default_factory=list)


@dataclass
class DurationInfo:
    total_days: Optional[int] = None
    frequency: str = ""
    timing: str = ""


@dataclass
class Warnings:
    drug_interactions: List[str] = field(default_factory=list)
    contraindications: List[str] = field(default_factory=list)
    overdose_symptoms: List[str] = field(default_factory=list)


@dataclass
class SafetyAnalysis:
    """Precautions, duration and warnings payload shown to the patient."""
    precautions: Precautions = field(default_factory=Precautions)
    duration: DurationInfo = field(default_factory=DurationInfo)
    warnings: Warnings = field(default_factory=Warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "precautions": {
                "dietary_restrictions": list(self.precautions.dietary_restrictions),
                "activity_limitations": list(self.precautions.activity_limitations),
                "side_effects": list(self.precautions.side_effects),
            },
            "duration": {
                "total_days": self.duration.total_days,
                "frequency": self.duration.frequency,
                "timing": self.duration.timing,
            },
            "warnings": {
                "drug_interactions": list(self.warnings.drug_interactions),
                "contraindications": list(self.warnings.contraindications),
                "overdose_symptoms": list(self.warnings.overdose_symptoms),
            },
        }
