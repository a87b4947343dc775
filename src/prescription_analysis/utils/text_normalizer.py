# ============================================================================
# src/prescription_analysis/utils/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

Cleans OCR or typed prescription text before it is sent to the LLM:
- Collapses whitespace runs
- Fixes common OCR character confusions next to digits
- Fixes common misreads of dosage words
"""

import re

# (pattern, replacement) applied in order
OCR_CORRECTIONS = [
    (re.compile(r"([0-9])l"), r"\g<1>1"),        # "5l0" -> "510"
    (re.compile(r"([0-9])I"), r"\g<1>1"),        # "5I0" -> "510"
    (re.compile(r"O([0-9])"), r"0\g<1>"),        # "O5" -> "05"
    (re.compile(r"rng", re.IGNORECASE), "mg"),
    (re.compile(r"tabiet", re.IGNORECASE), "tablet"),
]

WHITESPACE_RE = re.compile(r"\s+")


def normalize_prescription_text(text: str) -> str:
    """
    Clean raw prescription text.

    Never raises; None or empty input gives "".
    """
    if not text:
        return ""

    cleaned = WHITESPACE_RE.sub(" ", str(text))

    # Digit corrections can chain ("1ll" -> "11l" -> "111"), so run them to a
    # fixed point to keep normalization idempotent.
    previous = None
    while previous != cleaned:
        previous = cleaned
        for pattern, replacement in OCR_CORRECTIONS:
            cleaned = pattern.sub(replacement, cleaned)

    return cleaned.strip()
