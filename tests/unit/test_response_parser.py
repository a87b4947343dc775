# ============================================================================
# FILE: tests/unit/test_response_parser.py
# ============================================================================
"""
Unit tests for LLM response JSON extraction
"""

import pytest

from prescription_analysis.core.exceptions import ResponseParseError
from prescription_analysis.parsing.response_parser import parse_json_response


def test_parse_direct_json():
    assert parse_json_response('  {"a": 1}  ') == {"a": 1}


def test_parse_fenced_block_with_prose():
    text = 'Here: ```json\n{"a":1}\n``` thanks'
    assert parse_json_response(text) == {"a": 1}


def test_parse_bare_object_with_marker_field():
    text = '''
    Here is my analysis:
    {"medications": [{"name": "Metformin"}], "text": "Metformin 500mg"}
    Let me know if you need anything else.
    '''
    result = parse_json_response(text, marker_field="medications")
    assert result["medications"][0]["name"] == "Metformin"


def test_parse_unclosed_fence():
    text = '```json\n{"precautions": {"side_effects": ["Nausea"]}}'
    result = parse_json_response(text)
    assert result["precautions"]["side_effects"] == ["Nausea"]


def test_parse_repairs_trailing_comma():
    text = 'Result: {"medications": [{"name": "Ibuprofen",}],}'
    result = parse_json_response(text, marker_field="medications")
    assert result["medications"][0]["name"] == "Ibuprofen"


def test_parse_no_json_raises():
    with pytest.raises(ResponseParseError):
        parse_json_response("I could not find any medications in that text.")


def test_parse_empty_raises():
    with pytest.raises(ResponseParseError):
        parse_json_response("   ")


def test_parse_array_is_not_an_object():
    with pytest.raises(ResponseParseError):
        parse_json_response('["a", "b"]')
