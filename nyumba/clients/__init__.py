"""
HTTP clients for the third-party AI services.
"""

from nyumba.clients.base import BaseAPIClient
from nyumba.clients.groq import GroqClient
from nyumba.clients.image_generation import ImageGenerationClient

__all__ = [
    "BaseAPIClient",
    "GroqClient",
    "ImageGenerationClient",
]
