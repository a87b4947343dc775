# ============================================================================
# src/prescription_analysis/core/stage.py
# ============================================================================
"""
Abstract Pipeline Stage

Every LLM-backed step of the pipeline (extraction, safety analysis) is a
Stage. A stage implements `execute()`, which is free to raise; callers that
need to decide on a fallback go through `run()`, which never raises and hands
back a tagged StageResult instead.

Every stage gets:
- Logging
- Timing and execution metrics
- Uniform error capture
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar
import logging

from .exceptions import ConfigurationError, GatewayError, ResponseParseError

T = TypeVar("T")


@dataclass
class StageResult(Generic[T]):
    """
    Tagged outcome of a stage.

    ok=True  -> `value` holds the stage output
    ok=False -> `reason` explains the failure, `error_type` names the
                exception class ("ParseError", "GatewayError", ...)
    """
    ok: bool
    value: Optional[T] = None
    reason: str = ""
    error_type: str = ""

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "StageResult[T]":
        return cls(ok=False, reason=str(error), error_type=_error_kind(error))


def _error_kind(error: Exception) -> str:
    if isinstance(error, ResponseParseError):
        return "ParseError"
    if isinstance(error, GatewayError):
        return "GatewayError"
    if isinstance(error, ConfigurationError):
        return "ConfigurationError"
    return type(error).__name__


class Stage(ABC, Generic[T]):
    """
    Abstract base class for pipeline stages.

    Design principles:
    1. Single responsibility - each stage does one thing
    2. execute() reports failure by raising
    3. run() turns that into data so the caller picks the fallback
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.get_name()}")
        self._execution_count = 0
        self._failure_count = 0
        self._total_duration = 0.0

    @abstractmethod
    async def execute(self, *args, **kwargs) -> T:
        """Main stage logic. May raise."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Stage name for logging, e.g. "SafetyAnalyzer"."""
        pass

    async def run(self, *args, **kwargs) -> StageResult[T]:
        """
        Wrapper around execute() that handles logging, timing and errors.

        This is what orchestrators call.
        """
        stage_name = self.get_name()
        start_time = datetime.now()
        self._execution_count += 1

        self.logger.debug(f"Executing {stage_name}")

        try:
            value = await self.execute(*args, **kwargs)
        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            self._total_duration += duration
            self._failure_count += 1
            self.logger.warning(
                f"{stage_name} failed after {duration:.2f}s: "
                f"{type(e).__name__}: {e}"
            )
            return StageResult.failure(e)

        duration = (datetime.now() - start_time).total_seconds()
        self._total_duration += duration
        self.logger.info(f"{stage_name} completed in {duration:.2f}s")
        return StageResult.success(value)

    def get_metrics(self) -> Dict[str, Any]:
        """Execution count, failures, total and average time."""
        avg_duration = (
            self._total_duration / self._execution_count
            if self._execution_count > 0
            else 0.0
        )

        return {
            "stage_name": self.get_name(),
            "execution_count": self._execution_count,
            "failure_count": self._failure_count,
            "total_duration_seconds": self._total_duration,
            "average_duration_seconds": avg_duration,
        }
