"""
HTTP Client Module

requests-based HTTP client for fetching allocation sources.
"""

from .client import HttpClient, HttpError, HttpResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
]
