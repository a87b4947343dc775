# ============================================================================
# FILE: tests/unit/test_medication_extractor.py
# ============================================================================
"""
Unit tests for the medication extraction stage
"""

import json

import pytest

from prescription_analysis.core.exceptions import GatewayError
from prescription_analysis.llm.base import LLMTask
from prescription_analysis.pipeline.medication_extractor import MedicationExtractor


@pytest.mark.asyncio
async def test_extract_success(llm_client, task_responder, extraction_response, sample_prescription_text):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: extraction_response})
    extractor = MedicationExtractor(llm_client)

    result = await extractor.extract(sample_prescription_text)

    assert result.medication_count == 1
    assert result.is_ai_processed is True
    med = result.structured_text.medications[0]
    assert med.name == "Amoxicillin"
    assert med.dosage == "500mg"
    assert med.frequency == "three times daily"
    assert med.duration == 7
    assert med.special_instructions == "with food"
    assert result.structured_text.text == sample_prescription_text


@pytest.mark.asyncio
async def test_extract_prompt_contains_normalized_text(llm_client, task_responder, extraction_response):
    mock = task_responder({LLMTask.EXTRACTION: extraction_response})
    llm_client.complete = mock

    await MedicationExtractor(llm_client).extract("Amoxicillin   500 rng\n TID")

    prompt, task = mock.calls[0]
    assert task is LLMTask.EXTRACTION
    assert "Amoxicillin 500 mg TID" in prompt


@pytest.mark.asyncio
async def test_extract_validates_fields(llm_client, task_responder):
    reply = "```json\n" + json.dumps({
        "medications": [
            {"name": "Lisinopril", "dosage": "10mg", "frequency": "QD",
             "duration": "2 weeks", "specialInstructions": "whenever"},
            "not a medication object",
        ]
    }) + "\n```"
    llm_client.complete = task_responder({LLMTask.EXTRACTION: reply})

    result = await MedicationExtractor(llm_client).extract("Lisinopril 10mg QD")

    assert result.medication_count == 1
    med = result.structured_text.medications[0]
    assert med.frequency == "Take as prescribed by your doctor"
    assert med.duration == 14
    assert med.special_instructions == "Follow your doctor's instructions"


@pytest.mark.asyncio
async def test_extract_gateway_failure_degrades(llm_client, task_responder):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: GatewayError("boom", status=500)})

    result = await MedicationExtractor(llm_client).extract("  Amoxicillin   5OO rng ")

    assert result.to_dict() == {
        "structuredText": {"text": "Amoxicillin 5OO mg", "medications": []},
        "medicationCount": 0,
        "isAiProcessed": False,
    }


@pytest.mark.asyncio
async def test_extract_parse_failure_degrades(llm_client, task_responder):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: "Sorry, I cannot help with that."})

    result = await MedicationExtractor(llm_client).extract("Amoxicillin 500mg")

    assert result.medication_count == 0
    assert result.is_ai_processed is False


@pytest.mark.asyncio
async def test_extract_missing_key_degrades(unconfigured_client):
    result = await MedicationExtractor(unconfigured_client).extract("Amoxicillin 500mg")

    assert result.medication_count == 0
    assert result.is_ai_processed is False
    assert result.structured_text.text == "Amoxicillin 500mg"


@pytest.mark.asyncio
async def test_extract_unexpected_error_degrades(llm_client, task_responder):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: RuntimeError("bug")})

    result = await MedicationExtractor(llm_client).extract("Amoxicillin 500mg")

    assert result.is_ai_processed is False


@pytest.mark.asyncio
async def test_extract_without_medications_array(llm_client, task_responder):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: '{"text": "nothing here"}'})

    result = await MedicationExtractor(llm_client).extract("Drink water")

    assert result.medication_count == 0
    assert result.is_ai_processed is True
    assert result.structured_text.text == "Drink water"
