# ============================================================================
# src/prescription_analysis/llm/base.py
# ============================================================================
"""
Base LLM Client Interface

Defines the interface every chat-completion backend implements. A call names
a task; the task decides the system instruction, the sampling temperature and
the token ceiling, so callers only supply the user prompt.

Tasks:
- extraction: prescription text -> medications JSON
- safety_analysis: medications -> precautions/duration/warnings JSON
- chat_general / chat_prescription: health assistant answers
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union
import json
import logging


class LLMTask(Enum):
    """Prompting tasks the gateway knows about."""
    EXTRACTION = "extraction"
    SAFETY_ANALYSIS = "safety_analysis"
    CHAT_GENERAL = "chat_general"
    CHAT_PRESCRIPTION = "chat_prescription"


@dataclass(frozen=True)
class TaskProfile:
    """System instruction and sampling settings for one task."""
    system_prompt: str
    temperature: float
    max_tokens: int


SYSTEM_PROMPTS = {
    LLMTask.EXTRACTION: (
        "You are a pharmacist extracting medication information from prescriptions. "
        "Format your ENTIRE response as a valid JSON object with medications array and text field. "
        "Each medication should have name, dosage, frequency, duration, and specialInstructions fields. "
        "Use clear, standardized terms for frequency and timing."
    ),
    LLMTask.SAFETY_ANALYSIS: (
        "You are a pharmacist providing medication safety information. "
        "Your response must be a valid JSON object with no additional text. "
        "Use clear, specific language that patients can understand."
    ),
    LLMTask.CHAT_GENERAL: (
        "You are a helpful healthcare assistant that provides concise, accurate responses "
        "to general health-related questions. Keep responses short (1-2 sentences) for "
        "demonstration purposes."
    ),
    LLMTask.CHAT_PRESCRIPTION: (
        "You are a helpful healthcare assistant specializing in medication advice and "
        "prescription information. Provide concise, accurate responses (1-2 sentences) "
        "based on prescription details when available."
    ),
}


def build_task_profiles(config: Dict[str, Any]) -> Dict[LLMTask, TaskProfile]:
    """Resolve per-task temperature/max_tokens from a flat config dict."""
    chat_temperature = config.get('chat_temperature', 0.2)
    chat_max_tokens = config.get('chat_max_tokens', 256)

    return {
        LLMTask.EXTRACTION: TaskProfile(
            SYSTEM_PROMPTS[LLMTask.EXTRACTION],
            config.get('extraction_temperature', 0.2),
            config.get('extraction_max_tokens', 1024),
        ),
        LLMTask.SAFETY_ANALYSIS: TaskProfile(
            SYSTEM_PROMPTS[LLMTask.SAFETY_ANALYSIS],
            config.get('safety_temperature', 0.3),
            config.get('safety_max_tokens', 2048),
        ),
        LLMTask.CHAT_GENERAL: TaskProfile(
            SYSTEM_PROMPTS[LLMTask.CHAT_GENERAL], chat_temperature, chat_max_tokens
        ),
        LLMTask.CHAT_PRESCRIPTION: TaskProfile(
            SYSTEM_PROMPTS[LLMTask.CHAT_PRESCRIPTION], chat_temperature, chat_max_tokens
        ),
    }


class BaseLLMClient(ABC):
    """
    Abstract base class for chat-completion clients.

    All backends must implement:
    - complete(): one request, raw completion text back
    - is_configured(): whether credentials are present
    - close(): release network resources
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self.task_profiles = build_task_profiles(self.config)

        self._request_count = 0
        self._failure_count = 0
        self._total_request_time = 0.0

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier."""
        pass

    @abstractmethod
    async def complete(
        self,
        prompt: Union[str, Dict[str, Any]],
        task: LLMTask
    ) -> str:
        """
        Send a single chat-completion request.

        Args:
            prompt: User message; dicts are sent as JSON text
            task: Selects system instruction, temperature and max tokens

        Returns:
            Raw text of the first completion choice

        Raises:
            ConfigurationError: API key not configured
            GatewayError: Network failure, non-2xx, or malformed envelope
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        pass

    async def close(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None

    def profile_for(self, task: LLMTask) -> TaskProfile:
        return self.task_profiles[task]

    @staticmethod
    def serialize_prompt(prompt: Union[str, Dict[str, Any]]) -> str:
        if isinstance(prompt, str):
            return prompt
        return json.dumps(prompt)

    async def health_check(self) -> Dict[str, Any]:
        """Report configuration state without calling the provider."""
        configured = self.is_configured()
        return {
            "healthy": configured,
            "model": self.model_name,
            "details": "API key configured" if configured else "API key not configured",
        }

    def get_statistics(self) -> Dict[str, Any]:
        """Request counts and latency."""
        avg_time = (
            self._total_request_time / self._request_count
            if self._request_count > 0
            else 0.0
        )

        return {
            "model": self.model_name,
            "request_count": self._request_count,
            "failure_count": self._failure_count,
            "total_request_time": self._total_request_time,
            "average_request_time": avg_time,
        }
