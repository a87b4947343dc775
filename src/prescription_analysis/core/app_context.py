# ============================================================================
# src/prescription_analysis/core/app_context.py
# ============================================================================
"""
Application Context

Everything a request handler needs, built once at process start and torn down
at shutdown:

    settings -> LLM client -> orchestrator / assistant
             -> vision extractor

Handlers receive the context through FastAPI dependency injection instead of
reaching for module-level globals.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging

from ..assistant.health_assistant import HealthAssistant
from ..config.llm_config import LLMSettings
from ..config.server_config import ServerSettings
from ..extractors.vision_text_extractor import VisionTextExtractor
from ..llm.base import BaseLLMClient
from ..llm.client import create_client
from ..pipeline.orchestrator import AnalysisOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    llm_client: BaseLLMClient
    orchestrator: AnalysisOrchestrator
    assistant: HealthAssistant
    vision_extractor: VisionTextExtractor
    config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        config: Optional[Dict[str, Any]] = None,
        llm_client: Optional[BaseLLMClient] = None,
    ) -> "ApplicationContext":
        """
        Build the context from settings.

        Args:
            config: Overrides for LLM/server settings (lower-case keys)
            llm_client: Pre-built client (tests pass a fake here)
        """
        server = ServerSettings()
        merged = {
            **LLMSettings().to_dict(),
            "max_upload_bytes": server.MAX_UPLOAD_BYTES,
            **(config or {}),
        }

        client = llm_client or create_client(merged)
        context = cls(
            llm_client=client,
            orchestrator=AnalysisOrchestrator(client, merged),
            assistant=HealthAssistant(client, merged),
            vision_extractor=VisionTextExtractor(merged),
            config=merged,
        )
        logger.info(
            f"Application context ready (model={client.model_name}, "
            f"configured={client.is_configured()})"
        )
        return context

    async def close(self) -> None:
        await self.llm_client.close()
        await self.vision_extractor.close()
        logger.info("Application context closed")
