# ============================================================================
# src/prescription_analysis/llm/groq_client.py
# ============================================================================
"""
Groq Chat-Completion Client

Talks to any OpenAI-compatible `/chat/completions` endpoint over aiohttp
(Groq by default). One attempt per call: failures are raised to the caller,
which owns the fallback decision.

Config options:
    groq_api_key: Bearer token (required for complete())
    llm_base_url: API root (default: https://api.groq.com/openai/v1)
    llm_model: Model name (default: llama3-8b-8192)
    llm_timeout: Total request timeout in seconds (default: aiohttp default)
    <task>_temperature / <task>_max_tokens: per-task sampling settings
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, Optional, Union

import aiohttp

from .base import BaseLLMClient, LLMTask
from ..core.exceptions import ConfigurationError, GatewayError
from ..core.logging import mask_secret


DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama3-8b-8192"


class GroqChatClient(BaseLLMClient):
    """aiohttp-based chat-completion client."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        self.api_key = self.config.get('groq_api_key') or ""
        self.base_url = (self.config.get('llm_base_url') or DEFAULT_BASE_URL).rstrip('/')
        self._model_name = self.config.get('llm_model') or DEFAULT_MODEL
        self.timeout = self.config.get('llm_timeout')

        # HTTP session (created lazily, tied to event loop)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None

        if self.api_key:
            self.logger.info(
                f"Initialized chat client: {self.base_url} / {self._model_name} "
                f"(key {mask_secret(self.api_key)})"
            )
        else:
            self.logger.warning("GROQ_API_KEY not set; LLM calls will fall back to defaults")

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session for current event loop."""
        current_loop = asyncio.get_running_loop()

        needs_new_session = (
            self._session is None
            or self._session.closed
            or self._session_loop is not current_loop
        )

        if needs_new_session:
            # Close the stale session; its loop may already be gone
            if self._session is not None and not self._session.closed:
                try:
                    await self._session.close()
                except Exception as e:
                    self.logger.debug(f"Ignoring error closing stale HTTP session: {e}")
            self._session = None

            if self.timeout is not None:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                )
            else:
                self._session = aiohttp.ClientSession()
            self._session_loop = current_loop

        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._session_loop = None

    async def complete(
        self,
        prompt: Union[str, Dict[str, Any]],
        task: LLMTask
    ) -> str:
        if not self.api_key:
            raise ConfigurationError("Groq API key is not configured")

        profile = self.profile_for(task)
        payload = {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": profile.system_prompt},
                {"role": "user", "content": self.serialize_prompt(prompt)},
            ],
            "temperature": profile.temperature,
            "max_tokens": profile.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        start_time = datetime.now()
        self._request_count += 1

        try:
            session = await self._get_session()
            async with session.post(self.completions_url, json=payload, headers=headers) as response:
                if response.status < 200 or response.status >= 300:
                    error_text = await response.text()
                    raise GatewayError(
                        f"Provider error ({response.status}): {error_text[:200]}",
                        status=response.status,
                    )
                data = await response.json(content_type=None)
        except GatewayError:
            self._failure_count += 1
            raise
        except asyncio.TimeoutError as e:
            self._failure_count += 1
            raise GatewayError(f"Request to {self.completions_url} timed out") from e
        except (aiohttp.ClientError, ValueError) as e:
            self._failure_count += 1
            raise GatewayError(f"Request to {self.completions_url} failed: {e}") from e
        finally:
            self._total_request_time += (datetime.now() - start_time).total_seconds()

        content = self._extract_content(data)
        self.logger.debug(f"[{task.value}] raw completion ({len(content)} chars): {content[:500]}")
        return content

    def _extract_content(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            self._failure_count += 1
            raise GatewayError(f"Malformed completion envelope: {e}") from e

        if not isinstance(content, str):
            self._failure_count += 1
            raise GatewayError("Completion has no text content")

        return content
