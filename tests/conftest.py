# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import json
import struct
import zlib

import pytest

from prescription_analysis.llm.groq_client import GroqChatClient


@pytest.fixture
def llm_client():
    """Configured client; tests replace `complete` with a mock."""
    return GroqChatClient({"groq_api_key": "test-key-123456"})


@pytest.fixture
def unconfigured_client():
    return GroqChatClient({"groq_api_key": ""})


@pytest.fixture
def sample_prescription_text():
    return "Amoxicillin 500mg TID x7 days"


@pytest.fixture
def extraction_response():
    """Well-formed extraction reply for the amoxicillin prescription."""
    return json.dumps({
        "medications": [
            {
                "name": "Amoxicillin",
                "dosage": "500mg",
                "frequency": "three times daily",
                "duration": "7 days",
                "specialInstructions": "with food",
            }
        ],
        "text": "Amoxicillin 500mg TID x7 days",
    })


@pytest.fixture
def safety_response():
    """Well-formed safety analysis reply."""
    return json.dumps({
        "precautions": {
            "dietary_restrictions": ["Can be taken with or without food"],
            "activity_limitations": ["No specific activity limitations"],
            "side_effects": ["Diarrhea", "Nausea", "Rash"],
        },
        "duration": {
            "total_days": 7,
            "frequency": "Three times daily",
            "timing": "Every 8 hours",
        },
        "warnings": {
            "drug_interactions": ["Methotrexate", "Warfarin"],
            "contraindications": ["Penicillin allergy"],
            "overdose_symptoms": ["Severe diarrhea", "Confusion"],
        },
    })


@pytest.fixture
def task_responder():
    """
    Build a mock `complete` that answers per task.

    Values may be strings (returned) or exceptions (raised).
    """
    def build(responses):
        calls = []

        async def mock_complete(prompt, task):
            calls.append((prompt, task))
            value = responses[task]
            if isinstance(value, Exception):
                raise value
            return value

        mock_complete.calls = calls
        return mock_complete

    return build


def _png_chunk(chunk_type, data):
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


@pytest.fixture
def oversized_png():
    """Tiny PNG whose header claims 30000x30000 pixels."""
    header = struct.pack(">IIBBBBB", 30000, 30000, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )
