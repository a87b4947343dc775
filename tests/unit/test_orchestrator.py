# ============================================================================
# FILE: tests/unit/test_orchestrator.py
# ============================================================================
"""
Unit tests for the analysis orchestrator
"""

import json

import pytest

from prescription_analysis.core.exceptions import GatewayError
from prescription_analysis.llm.base import LLMTask
from prescription_analysis.pipeline.fallbacks import (
    BASIC_DEFAULTS,
    basic_safety_analysis,
)
from prescription_analysis.pipeline.orchestrator import AnalysisOrchestrator


def _assert_basic_analysis(analysis):
    data = analysis.to_dict()
    assert data == basic_safety_analysis().to_dict()
    assert data["duration"]["total_days"] is None
    assert data["duration"]["frequency"] == "Take as prescribed by your doctor"
    assert data["duration"]["timing"] == "Follow your doctor's instructions"
    for group in ("precautions", "warnings"):
        for field_name, items in data[group].items():
            assert items == [BASIC_DEFAULTS[field_name]]


@pytest.mark.asyncio
async def test_analyze_end_to_end(llm_client, task_responder, extraction_response,
                                  safety_response, sample_prescription_text):
    mock = task_responder({
        LLMTask.EXTRACTION: extraction_response,
        LLMTask.SAFETY_ANALYSIS: safety_response,
    })
    llm_client.complete = mock
    orchestrator = AnalysisOrchestrator(llm_client)

    analysis = await orchestrator.analyze(sample_prescription_text)

    assert analysis.duration.total_days == 7
    assert analysis.precautions.side_effects == ["Diarrhea", "Nausea", "Rash"]
    assert [task for _, task in mock.calls] == [LLMTask.EXTRACTION, LLMTask.SAFETY_ANALYSIS]


@pytest.mark.asyncio
async def test_analyze_no_medications_returns_basic(llm_client, task_responder):
    mock = task_responder({LLMTask.EXTRACTION: json.dumps({"medications": []})})
    llm_client.complete = mock

    analysis = await AnalysisOrchestrator(llm_client).analyze("Rest and fluids")

    _assert_basic_analysis(analysis)
    # Safety analysis is skipped entirely
    assert [task for _, task in mock.calls] == [LLMTask.EXTRACTION]


@pytest.mark.asyncio
async def test_analyze_gateway_down_returns_basic(llm_client, task_responder, sample_prescription_text):
    llm_client.complete = task_responder({
        LLMTask.EXTRACTION: GatewayError("unavailable", status=503),
        LLMTask.SAFETY_ANALYSIS: GatewayError("unavailable", status=503),
    })

    analysis = await AnalysisOrchestrator(llm_client).analyze(sample_prescription_text)

    _assert_basic_analysis(analysis)


@pytest.mark.asyncio
async def test_analyze_analyzer_failure_returns_basic(llm_client, task_responder,
                                                      extraction_response, sample_prescription_text):
    llm_client.complete = task_responder({
        LLMTask.EXTRACTION: extraction_response,
        LLMTask.SAFETY_ANALYSIS: "I am unable to provide medical advice.",
    })
    orchestrator = AnalysisOrchestrator(llm_client)

    analysis = await orchestrator.analyze(sample_prescription_text)

    _assert_basic_analysis(analysis)
    assert orchestrator.get_metrics()["analyzer"]["failure_count"] == 1


@pytest.mark.asyncio
async def test_analyze_missing_key_returns_basic(unconfigured_client, sample_prescription_text):
    analysis = await AnalysisOrchestrator(unconfigured_client).analyze(sample_prescription_text)

    _assert_basic_analysis(analysis)


@pytest.mark.asyncio
async def test_basic_analysis_is_fresh_copy(llm_client, task_responder):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: '{"medications": []}'})
    orchestrator = AnalysisOrchestrator(llm_client)

    first = await orchestrator.analyze("nothing")
    first.precautions.side_effects.append("mutated")
    second = await orchestrator.analyze("nothing")

    assert second.precautions.side_effects == [BASIC_DEFAULTS["side_effects"]]


@pytest.mark.asyncio
async def test_preprocess_returns_extraction(llm_client, task_responder,
                                             extraction_response, sample_prescription_text):
    mock = task_responder({LLMTask.EXTRACTION: extraction_response})
    llm_client.complete = mock

    result = await AnalysisOrchestrator(llm_client).preprocess(sample_prescription_text)

    data = result.to_dict()
    assert data["medicationCount"] == 1
    assert data["isAiProcessed"] is True
    assert data["structuredText"]["medications"][0]["duration"] == 7
    assert len(mock.calls) == 1


@pytest.mark.asyncio
async def test_preprocess_degrades_when_gateway_down(llm_client, task_responder):
    llm_client.complete = task_responder({LLMTask.EXTRACTION: GatewayError("timeout")})

    result = await AnalysisOrchestrator(llm_client).preprocess("Amoxicillin  500mg")

    assert result.to_dict() == {
        "structuredText": {"text": "Amoxicillin 500mg", "medications": []},
        "medicationCount": 0,
        "isAiProcessed": False,
    }
