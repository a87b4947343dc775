# ============================================================================
# src/prescription_analysis/extractors/vision_text_extractor.py
# ============================================================================
"""
Vision Text Extractor

Reads the text off a prescription photo with a vision-capable chat model.
Single API call: the image goes up as a base64 data URL next to a short
instruction, the plain text comes back.

Only JPEG and PNG are accepted. Images are checked with Pillow before any
network call so a renamed or truncated upload fails fast with a 400.

Usage:
    extractor = VisionTextExtractor(config)
    text = await extractor.extract_text(image_bytes, "image/png")
"""

import base64
import logging
from io import BytesIO
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ConfigurationError, ImageExtractionError, InputValidationError
from ..llm.prompts import VISION_OCR_INSTRUCTION

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"image/jpeg", "image/png"}

# Pillow format name -> MIME type
PIL_FORMATS = {"JPEG": "image/jpeg", "PNG": "image/png"}

DEFAULT_VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"


class VisionTextExtractor:
    """OpenAI-SDK based image-to-text extractor."""

    def __init__(self, config: Dict[str, Any] = None):
        self.config = config or {}
        self._client = None

        self.api_key = self.config.get('groq_api_key') or ""
        self.base_url = self.config.get('llm_base_url') or "https://api.groq.com/openai/v1"
        self.model = self.config.get('vision_model') or DEFAULT_VISION_MODEL
        self.temperature = self.config.get('vision_temperature', 0.1)
        self.max_tokens = self.config.get('vision_max_tokens', 4096)
        self.max_upload_bytes = self.config.get('max_upload_bytes', 5 * 1024 * 1024)
        self.timeout = self.config.get('llm_timeout')

    @property
    def client(self):
        """Lazy load the async OpenAI-compatible client."""
        if self._client is None:
            from openai import AsyncOpenAI

            kwargs = {"api_key": self.api_key, "base_url": self.base_url, "max_retries": 0}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = AsyncOpenAI(**kwargs)
            logger.info(f"Vision client initialized: base_url={self.base_url}, model={self.model}")
        return self._client

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    def check_image(self, image_bytes: bytes, mime_type: Optional[str]) -> str:
        """
        Validate an upload and return its MIME type.

        Raises:
            InputValidationError: empty, too large, wrong type, or not a real image
        """
        if not image_bytes:
            raise InputValidationError("No file uploaded")

        if len(image_bytes) > self.max_upload_bytes:
            raise InputValidationError(
                f"Image is larger than {self.max_upload_bytes // (1024 * 1024)}MB"
            )

        if mime_type and mime_type not in ALLOWED_MIME_TYPES:
            raise InputValidationError("Only JPG and PNG images are allowed")

        try:
            with Image.open(BytesIO(image_bytes)) as image:
                image_format = image.format
                image.verify()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
            raise InputValidationError(f"File is not a readable image: {e}") from e

        detected = PIL_FORMATS.get(image_format)
        if detected is None:
            raise InputValidationError("Only JPG and PNG images are allowed")

        return detected

    async def extract_text(self, image_bytes: bytes, mime_type: Optional[str] = None) -> str:
        """
        Extract all visible text from a prescription image.

        Raises:
            InputValidationError: bad upload
            ConfigurationError: API key missing
            ImageExtractionError: provider call failed or returned nothing
        """
        mime_type = self.check_image(image_bytes, mime_type)

        if not self.is_configured():
            raise ConfigurationError("Groq API key is not configured")

        encoded = base64.b64encode(image_bytes).decode("ascii")
        logger.info(f"Sending {len(image_bytes)} byte {mime_type} image to {self.model}")

        from openai import OpenAIError

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": VISION_OCR_INSTRUCTION},
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
                            },
                        ],
                    }
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"Vision extraction failed: {type(e).__name__}: {e}")
            raise ImageExtractionError(f"Failed to extract text from image: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise ImageExtractionError("Vision model returned no choices") from e

        if not content or not content.strip():
            raise ImageExtractionError("Vision model returned no text")

        text = content.strip()
        logger.info(f"Extracted {len(text)} chars from image")
        return text
