# ============================================================================
# src/prescription_analysis/extractors/__init__.py
# ============================================================================

from .vision_text_extractor import VisionTextExtractor, ALLOWED_MIME_TYPES

__all__ = ["VisionTextExtractor", "ALLOWED_MIME_TYPES"]
