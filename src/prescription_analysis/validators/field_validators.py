# ============================================================================
# src/prescription_analysis/validators/field_validators.py
# ============================================================================
"""
Field validators for LLM-extracted medication fields.

LLM output is free text. These guards keep values outside a known vocabulary
from reaching the client: unrecognized frequency/timing strings are replaced
with a generic instruction, unparseable durations become None.
"""

import re
from typing import Any, Optional

DEFAULT_FREQUENCY = "Take as prescribed by your doctor"
DEFAULT_TIMING = "Follow your doctor's instructions"

VALID_FREQUENCY_PATTERNS = [
    'once daily', 'twice daily', 'three times daily', 'four times daily',
    'every morning', 'every night', 'every evening',
    'every 4 hours', 'every 6 hours', 'every 8 hours', 'every 12 hours',
    'as needed', 'with meals', 'before meals', 'after meals',
    'weekly', 'monthly', 'daily',
]

VALID_TIMING_PATTERNS = [
    'before breakfast', 'after breakfast', 'before lunch', 'after lunch',
    'before dinner', 'after dinner', 'at bedtime', 'in the morning',
    'in the evening', 'with food', 'on empty stomach', 'with meals',
    'before meals', 'after meals',
]

NUMERIC_FREQUENCY_RE = re.compile(r"(\d+)\s*times?\s*(daily|a day|per day)", re.IGNORECASE)

DAYS_RE = re.compile(r"(\d+)\s*(days|day|d)", re.IGNORECASE)
WEEKS_RE = re.compile(r"(\d+)\s*(weeks|week|w)", re.IGNORECASE)
MONTHS_RE = re.compile(r"(\d+)\s*(months|month|m)", re.IGNORECASE)
BARE_NUMBER_RE = re.compile(r"^(\d+)$")


def validate_frequency(frequency: Any) -> str:
    """
    Normalize a dosing frequency.

    >>> validate_frequency("twice daily")
    'twice daily'
    >>> validate_frequency("2 times a day")
    '2 times daily'
    >>> validate_frequency("")
    'Take as prescribed by your doctor'
    """
    if not frequency or not isinstance(frequency, str):
        return DEFAULT_FREQUENCY

    freq_lower = frequency.lower().strip()

    for pattern in VALID_FREQUENCY_PATTERNS:
        if pattern in freq_lower:
            return frequency.strip()

    numeric = NUMERIC_FREQUENCY_RE.search(freq_lower)
    if numeric:
        count = numeric.group(1)
        return f"{count} time{'' if count == '1' else 's'} daily"

    return DEFAULT_FREQUENCY


def validate_timing(timing: Any) -> str:
    """Normalize a timing / special-instruction string."""
    if not timing or not isinstance(timing, str):
        return DEFAULT_TIMING

    timing_lower = timing.lower().strip()

    for pattern in VALID_TIMING_PATTERNS:
        if pattern in timing_lower:
            return timing.strip()

    return DEFAULT_TIMING


def validate_duration(duration: Any) -> Optional[int]:
    """
    Parse a treatment duration into days.

    "N day(s)" -> N, "N week(s)" -> 7N, "N month(s)" -> 30N, bare integer -> N.
    Anything else gives None. Never raises.
    """
    if duration is None or isinstance(duration, bool):
        return None

    if isinstance(duration, int):
        return duration if duration > 0 else None

    if isinstance(duration, float):
        return int(duration) if duration.is_integer() and duration > 0 else None

    duration_str = str(duration).lower().strip()
    if not duration_str:
        return None

    days = DAYS_RE.search(duration_str)
    if days:
        return int(days.group(1))

    weeks = WEEKS_RE.search(duration_str)
    if weeks:
        return int(weeks.group(1)) * 7

    months = MONTHS_RE.search(duration_str)
    if months:
        return int(months.group(1)) * 30

    bare = BARE_NUMBER_RE.match(duration_str)
    if bare:
        return int(bare.group(1))

    return None
