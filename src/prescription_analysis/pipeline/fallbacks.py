# ============================================================================
# src/prescription_analysis/pipeline/fallbacks.py
# ============================================================================
"""
Canned advisory text.

BASIC_* values make up the fixed analysis returned when AI processing finds
no medications or fails. ANALYZER_DEFAULTS fill individual empty categories
of an otherwise successful AI analysis.
"""

from ..core.models import DurationInfo, Precautions, SafetyAnalysis, Warnings
from ..validators.field_validators import DEFAULT_FREQUENCY, DEFAULT_TIMING

BASIC_DIETARY = "Take your medication at the same time each day in relation to your meals"
BASIC_ACTIVITY = "Until you know how this medication affects you, be careful with driving or operating machinery"
BASIC_SIDE_EFFECTS = "Contact your doctor if you notice any unusual changes in how you feel"
BASIC_INTERACTIONS = "Tell your doctor about all medications you're taking, including over-the-counter medicines"
BASIC_CONTRAINDICATIONS = "Tell your doctor about any allergies or health conditions you have"
BASIC_OVERDOSE = "Seek emergency medical attention if you think you've taken too much"

ANALYZER_DEFAULT_FREQUENCY = "Take as prescribed"
ANALYZER_DEFAULT_TIMING = "Follow doctor's instructions"

ANALYZER_DEFAULTS = {
    "dietary_restrictions": "Take medication at consistent times relative to meals",
    "activity_limitations": "Monitor how medication affects you before driving or operating machinery",
    "side_effects": "Contact your doctor if you experience any unusual symptoms",
    "drug_interactions": "Inform healthcare providers about all medications you take",
    "contraindications": "Discuss any allergies or health conditions with your doctor",
    "overdose_symptoms": "Seek immediate medical attention if you suspect an overdose",
}

BASIC_DEFAULTS = {
    "dietary_restrictions": BASIC_DIETARY,
    "activity_limitations": BASIC_ACTIVITY,
    "side_effects": BASIC_SIDE_EFFECTS,
    "drug_interactions": BASIC_INTERACTIONS,
    "contraindications": BASIC_CONTRAINDICATIONS,
    "overdose_symptoms": BASIC_OVERDOSE,
}


def basic_safety_analysis() -> SafetyAnalysis:
    """Fresh copy of the non-AI fallback analysis."""
    return SafetyAnalysis(
        precautions=Precautions(
            dietary_restrictions=[BASIC_DIETARY],
            activity_limitations=[BASIC_ACTIVITY],
            side_effects=[BASIC_SIDE_EFFECTS],
        ),
        duration=DurationInfo(
            total_days=None,
            frequency=DEFAULT_FREQUENCY,
            timing=DEFAULT_TIMING,
        ),
        warnings=Warnings(
            drug_interactions=[BASIC_INTERACTIONS],
            contraindications=[BASIC_CONTRAINDICATIONS],
            overdose_symptoms=[BASIC_OVERDOSE],
        ),
    )
