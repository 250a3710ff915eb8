"""
Configuration for fetch_client.
"""
from dataclasses import dataclass, field
from typing import Dict
from urllib.parse import urlparse

import httpx


@dataclass(frozen=True)
class ClientConfig:
    """
    Where and how AsyncFetchClient connects.

    Args:
        base_url: Absolute http(s) URL request paths are appended to
        timeout: Seconds allowed for reading and writing
        connect_timeout: Seconds allowed to open the connection
        headers: Sent with every request

    Raises:
        ValueError: If base_url is missing or not an absolute http(s) URL
    """

    base_url: str
    timeout: float = 30.0
    connect_timeout: float = 5.0
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url is required")
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid base_url: {self.base_url}")

    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.timeout, connect=self.connect_timeout)
