# ============================================================================
# src/prescription_analysis/api/schemas.py
# ============================================================================
"""
Request bodies. Fields are optional so missing input is reported as a 400
with a readable message rather than a 422 validation dump.
"""

from typing import Optional

from pydantic import BaseModel


class OcrTextRequest(BaseModel):
    ocrText: Optional[str] = None


class ChatRequest(BaseModel):
    query: Optional[str] = None
    contextType: str = "general"
    prescriptionText: Optional[str] = None
