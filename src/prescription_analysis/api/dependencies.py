# ============================================================================
# src/prescription_analysis/api/dependencies.py
# ============================================================================

from fastapi import HTTPException, Request

from ..core.app_context import ApplicationContext


def get_app_context(request: Request) -> ApplicationContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status_code=503, detail="Service is starting up")
    return context
