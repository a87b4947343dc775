# ============================================================================
# src/prescription_analysis/assistant/health_assistant.py
# ============================================================================
"""
Health Assistant

Short (1-2 sentence) answers to health questions, either general or about a
specific prescription. When the LLM call fails the assistant answers from a
small set of keyword-matched canned responses instead of erroring.
"""

from enum import Enum
from typing import Any, Dict, Optional
import logging

from ..core.exceptions import ConfigurationError, GatewayError, InputValidationError
from ..llm.base import BaseLLMClient, LLMTask
from ..llm.prompts import build_general_chat_prompt, build_prescription_chat_prompt


class ContextType(Enum):
    GENERAL = "general"
    PRESCRIPTION = "prescription"


DEFAULT_RESPONSE = (
    "I recommend consulting with your healthcare provider for personalized advice on "
    "this matter. They can provide guidance specific to your health situation."
)

# medication -> [(required keywords (all), any-of keywords, answer)]
MEDICATION_RESPONSES = {
    "amoxicillin": [
        (("skip", "dose"), (), "Do not skip doses of Amoxicillin; take as prescribed to ensure the infection is properly treated."),
        ((), ("food", "eat"), "Amoxicillin can be taken with or without food, but taking it with a meal may help reduce stomach upset."),
        ((), ("alcohol", "drink"), "It's best to avoid alcohol while taking Amoxicillin as it can increase side effects like stomach upset and make you feel more tired."),
        (("side effect",), (), "Common side effects of Amoxicillin include diarrhea, stomach upset, and rash. Contact your doctor if you experience severe side effects."),
    ],
    "lisinopril": [
        (("skip", "dose"), (), "If you miss a dose of Lisinopril, take it as soon as you remember. If it's almost time for your next dose, skip the missed dose and continue your regular schedule."),
        ((), ("food", "eat"), "Lisinopril can be taken with or without food. Maintain a low-sodium diet as recommended by your doctor."),
        ((), ("alcohol", "drink"), "Limit alcohol consumption while taking Lisinopril as it can enhance the blood pressure-lowering effect and cause dizziness."),
        (("side effect",), (), "Common side effects of Lisinopril include dry cough, dizziness, and headache. Contact your doctor if these persist or worsen."),
    ],
}

PRESCRIPTION_RESPONSES = [
    (("skip", "dose"), (), "Generally, it's important not to skip doses of your medication. If you miss a dose, follow the guidance in your prescription or consult your doctor."),
    (("side effect",), (), "Every medication can have side effects. Monitor how you feel and report any unusual symptoms to your healthcare provider."),
]

GENERAL_RESPONSES = [
    (("diabetes",), ("diet", "food"), "For diabetes management, focus on low-carb foods, plenty of vegetables, lean proteins, and whole grains. Consult a nutritionist for personalized advice."),
    ((), ("blood pressure", "hypertension"), "To manage blood pressure, reduce sodium intake, exercise regularly, maintain a healthy weight, and take medications as prescribed."),
    ((), ("sleep", "insomnia"), "For better sleep, maintain a consistent schedule, avoid screens before bed, limit caffeine, and create a comfortable sleep environment."),
    ((), ("stress", "anxiety"), "To manage stress, try deep breathing exercises, regular physical activity, adequate sleep, and mindfulness practices."),
    ((), ("headache", "migraine"), "For headaches, ensure you're hydrated, get enough rest, and consider over-the-counter pain relievers. Consult a doctor for frequent or severe headaches."),
]


def _matches(query: str, required, any_of) -> bool:
    if not all(word in query for word in required):
        return False
    return not any_of or any(word in query for word in any_of)


def canned_response(query: str, prescription_text: Optional[str] = None) -> str:
    """Keyword-matched answer used when the LLM is unavailable."""
    lower_query = query.lower()

    if prescription_text:
        medication_text = prescription_text.lower()
        for medication, rules in MEDICATION_RESPONSES.items():
            if medication in medication_text:
                for required, any_of, answer in rules:
                    if _matches(lower_query, required, any_of):
                        return answer
                break

        for required, any_of, answer in PRESCRIPTION_RESPONSES:
            if _matches(lower_query, required, any_of):
                return answer

    for required, any_of, answer in GENERAL_RESPONSES:
        if _matches(lower_query, required, any_of):
            return answer

    return DEFAULT_RESPONSE


class HealthAssistant:
    """AI chatbot for health and prescription questions."""

    def __init__(self, llm_client: BaseLLMClient, config: Optional[Dict[str, Any]] = None):
        self.llm = llm_client
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

    async def respond(
        self,
        query: str,
        context_type: str = "general",
        prescription_text: Optional[str] = None,
    ) -> str:
        """
        Answer a question.

        Args:
            query: The user's question (required)
            context_type: "general" or "prescription"
            prescription_text: Prescription to answer about, for prescription context

        Raises:
            InputValidationError: empty query or unknown context type
        """
        if not query or not query.strip():
            raise InputValidationError("Query is required")

        try:
            context = ContextType(context_type or "general")
        except ValueError:
            raise InputValidationError(
                f"contextType must be one of: {', '.join(c.value for c in ContextType)}"
            )

        # Only use the prescription when the caller asked for that context
        if context is not ContextType.PRESCRIPTION:
            prescription_text = None

        if prescription_text:
            prompt = build_prescription_chat_prompt(prescription_text, query)
        else:
            prompt = build_general_chat_prompt(query)

        task = (
            LLMTask.CHAT_PRESCRIPTION
            if context is ContextType.PRESCRIPTION
            else LLMTask.CHAT_GENERAL
        )

        try:
            answer = (await self.llm.complete(prompt, task)).strip()
        except (ConfigurationError, GatewayError) as e:
            self.logger.warning(f"Chat completion failed ({e}), using canned response")
            return canned_response(query, prescription_text)
        except Exception:
            self.logger.exception("Unexpected error during chat completion, using canned response")
            return canned_response(query, prescription_text)

        if not answer:
            self.logger.warning("Empty chat completion, using canned response")
            return canned_response(query, prescription_text)

        return answer
