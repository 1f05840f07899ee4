"""
Client for the image-generation gateway used to illustrate demo listings.
"""

import base64
import binascii
from typing import Any, Dict, Optional, Tuple
import httpx
import logging

from nyumba.clients.base import BaseAPIClient
from nyumba.config import settings
from nyumba.utils.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """
    Split "data:image/png;base64,<payload>" into its content type and bytes.

    Raises:
        ValueError: If the value is not a base64 data URL
    """
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:"):
        raise ValueError("Image is not a data URL")

    content_type = header[len("data:"):].split(";")[0] or "image/png"
    try:
        return content_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}")


def extract_image_url(data: Dict[str, Any]) -> Optional[str]:
    try:
        return data["choices"][0]["message"]["images"][0]["image_url"]["url"]
    except (KeyError, IndexError, TypeError):
        return None


class ImageGenerationClient(BaseAPIClient):

    service_name = "Image generation"
    error_message = "Image generation failed"

    def __init__(self, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(settings.image_api_url, api_key, transport=transport)

    async def generate(self, prompt: str) -> Tuple[str, bytes]:
        """
        Generate one image for the prompt.

        Returns:
            (content_type, image bytes)
        """
        payload = {
            "model": settings.image_model,
            "messages": [{"role": "user", "content": prompt}],
            "modalities": ["image", "text"],
        }
        data = await self.post_json(payload)

        image_url = extract_image_url(data)
        if not image_url:
            raise ExternalServiceError("No image returned by the image generator")

        try:
            return decode_data_url(image_url)
        except ValueError as e:
            logger.error(f"Image generator returned an unusable image: {e}")
            raise ExternalServiceError("Image generator returned an unusable image")
