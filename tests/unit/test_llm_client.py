# ============================================================================
# FILE: tests/unit/test_llm_client.py
# ============================================================================
"""
Unit tests for the chat-completion gateway
"""

import json

import aiohttp
import pytest

from prescription_analysis.core.exceptions import ConfigurationError, GatewayError
from prescription_analysis.llm.base import LLMTask
from prescription_analysis.llm.client import create_client
from prescription_analysis.llm.groq_client import GroqChatClient


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def text(self):
        return self._body if isinstance(self._body, str) else json.dumps(self._body)

    async def json(self, content_type=None):
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def post(self, url, json=None, headers=None):
        self.requests.append({"url": url, "json": json, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


def _use_session(client, session):
    async def get_session():
        return session
    client._get_session = get_session


def test_task_profiles_follow_config():
    client = GroqChatClient({
        "groq_api_key": "k",
        "extraction_temperature": 0.0,
        "safety_max_tokens": 99,
    })
    assert client.profile_for(LLMTask.EXTRACTION).temperature == 0.0
    assert client.profile_for(LLMTask.SAFETY_ANALYSIS).max_tokens == 99
    assert client.profile_for(LLMTask.CHAT_GENERAL).max_tokens == 256


def test_create_client_override():
    client = create_client({"groq_api_key": "abc", "llm_model": "test-model"})
    assert client.is_configured()
    assert client.model_name == "test-model"


@pytest.mark.asyncio
async def test_complete_without_key_raises(unconfigured_client):
    with pytest.raises(ConfigurationError):
        await unconfigured_client.complete("hello", LLMTask.CHAT_GENERAL)


@pytest.mark.asyncio
async def test_complete_returns_first_choice(llm_client):
    session = FakeSession(FakeResponse(200, {
        "choices": [{"message": {"content": '{"medications": []}'}}]
    }))
    _use_session(llm_client, session)

    text = await llm_client.complete({"medications": []}, LLMTask.SAFETY_ANALYSIS)

    assert text == '{"medications": []}'
    request = session.requests[0]
    assert request["url"].endswith("/chat/completions")
    assert request["headers"]["Authorization"] == "Bearer test-key-123456"
    assert request["json"]["temperature"] == 0.3
    assert request["json"]["max_tokens"] == 2048
    assert request["json"]["messages"][0]["role"] == "system"
    # dict prompts are sent as JSON text
    assert json.loads(request["json"]["messages"][1]["content"]) == {"medications": []}


@pytest.mark.asyncio
async def test_complete_non_2xx_raises(llm_client):
    _use_session(llm_client, FakeSession(FakeResponse(429, "rate limited")))

    with pytest.raises(GatewayError) as exc_info:
        await llm_client.complete("hi", LLMTask.EXTRACTION)

    assert exc_info.value.status == 429
    assert llm_client.get_statistics()["failure_count"] == 1


@pytest.mark.asyncio
async def test_complete_network_error_raises(llm_client):
    _use_session(llm_client, FakeSession(error=aiohttp.ClientConnectionError("refused")))

    with pytest.raises(GatewayError):
        await llm_client.complete("hi", LLMTask.EXTRACTION)


@pytest.mark.asyncio
async def test_complete_malformed_envelope_raises(llm_client):
    _use_session(llm_client, FakeSession(FakeResponse(200, {"choices": []})))

    with pytest.raises(GatewayError):
        await llm_client.complete("hi", LLMTask.EXTRACTION)


@pytest.mark.asyncio
async def test_single_attempt_no_retry(llm_client):
    session = FakeSession(FakeResponse(503, "unavailable"))
    _use_session(llm_client, session)

    with pytest.raises(GatewayError):
        await llm_client.complete("hi", LLMTask.EXTRACTION)

    assert len(session.requests) == 1


@pytest.mark.asyncio
async def test_health_check_reports_configuration(llm_client, unconfigured_client):
    assert (await llm_client.health_check())["healthy"] is True
    assert (await unconfigured_client.health_check())["healthy"] is False


class StaleSession:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_session_from_another_loop_is_closed(llm_client):
    stale = StaleSession()
    llm_client._session = stale
    llm_client._session_loop = object()

    session = await llm_client._get_session()

    assert stale.closed is True
    assert session is not stale
    assert isinstance(session, aiohttp.ClientSession)
    await llm_client.close()
    assert session.closed
