# ============================================================================
# src/prescription_analysis/api/chatbot.py
# ============================================================================

from fastapi import APIRouter, Depends, HTTPException

from .dependencies import get_app_context
from .schemas import ChatRequest
from ..core.app_context import ApplicationContext
from ..core.exceptions import InputValidationError

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post("")
async def chatbot_response(
    body: ChatRequest,
    context: ApplicationContext = Depends(get_app_context),
):
    """Health assistant answer for a general or prescription question."""
    try:
        response = await context.assistant.respond(
            body.query or "",
            context_type=body.contextType,
            prescription_text=body.prescriptionText,
        )
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"response": response}
