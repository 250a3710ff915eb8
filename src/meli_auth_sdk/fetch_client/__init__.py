"""
Minimal async HTTP client used to reach the credential service.
"""
from .types import FetchResponse, QueryParams
from .config import ClientConfig
from .client import AsyncFetchClient

__all__ = [
    "FetchResponse",
    "QueryParams",
    "ClientConfig",
    "AsyncFetchClient",
]
