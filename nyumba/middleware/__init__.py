"""
Middleware package for the Nyumba API.
"""

from .request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
]
