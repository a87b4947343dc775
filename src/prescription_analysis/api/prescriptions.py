# ============================================================================
# src/prescription_analysis/api/prescriptions.py
# ============================================================================
"""
Prescription endpoints

POST /prescriptions/preprocess    {ocrText} -> structured medication list
POST /prescriptions/analyze       {ocrText} -> safety analysis
POST /prescriptions/extract-text  multipart "image" -> {text}

preprocess and analyze always answer 200 once input is present: LLM
failures are absorbed by the pipeline's fallbacks.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from .dependencies import get_app_context
from .schemas import OcrTextRequest
from ..core.app_context import ApplicationContext
from ..core.exceptions import ConfigurationError, ImageExtractionError, InputValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])


def _require_text(body: OcrTextRequest) -> str:
    if not body.ocrText or not body.ocrText.strip():
        raise HTTPException(status_code=400, detail="OCR text is required")
    return body.ocrText


@router.post("/preprocess")
async def preprocess_text(
    body: OcrTextRequest,
    context: ApplicationContext = Depends(get_app_context),
):
    """Extract structured medication info from raw OCR text."""
    ocr_text = _require_text(body)
    extraction = await context.orchestrator.preprocess(ocr_text)
    return {"success": True, "data": extraction.to_dict()}


@router.post("/analyze")
async def analyze_prescription(
    body: OcrTextRequest,
    context: ApplicationContext = Depends(get_app_context),
):
    """Full safety analysis of a prescription."""
    ocr_text = _require_text(body)
    logger.info(f"Prescription analysis requested ({len(ocr_text)} chars)")
    analysis = await context.orchestrator.analyze(ocr_text)
    return {"success": True, "data": analysis.to_dict()}


@router.post("/extract-text")
async def extract_text_from_image(
    image: Optional[UploadFile] = File(None),
    context: ApplicationContext = Depends(get_app_context),
):
    """Read prescription text from a JPG/PNG photo."""
    if image is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await image.read()
    logger.info(f"Image upload received: {image.filename} ({len(content)} bytes)")

    try:
        text = await context.vision_extractor.extract_text(content, image.content_type)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ConfigurationError, ImageExtractionError) as e:
        raise HTTPException(status_code=500, detail=f"Failed to extract text from image: {e}")

    return {"success": True, "data": {"text": text}}
