"""
JSON GET client over httpx.
"""
import json
import logging
from typing import Any, Dict, Optional

import httpx

from .config import ClientConfig
from .types import FetchResponse, QueryParams

logger = logging.getLogger(__name__)


class AsyncFetchClient:
    """
    Asynchronous GET client returning decoded FetchResponse dicts.

    Transport errors from httpx propagate to the caller untouched.

    Args:
        config: Base URL, timeouts and default headers
        httpx_client: Pre-built httpx client, closed together with this one
    """

    def __init__(
        self,
        config: ClientConfig,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config
        if httpx_client is None:
            httpx_client = httpx.AsyncClient(timeout=config.httpx_timeout())
        self._client = httpx_client
        self._closed = False

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def _url(self, path: str) -> str:
        if not path:
            return self._config.base_url
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self, headers: Optional[Dict[str, str]]) -> httpx.Headers:
        merged = httpx.Headers({"accept": "application/json"})
        merged.update(self._config.headers)
        merged.update(headers or {})
        return merged

    @staticmethod
    def _decode(text: str) -> Optional[Any]:
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text

    async def get(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        query: Optional[QueryParams] = None,
        timeout: Optional[float] = None,
    ) -> FetchResponse:
        """
        Send a GET request below base_url.

        Args:
            path: Path appended to base_url
            headers: Per-request headers, merged over the configured ones
            query: Query string parameters
            timeout: Per-request timeout in seconds

        Returns:
            FetchResponse with the decoded body

        Raises:
            RuntimeError: If the client has been closed
            httpx.HTTPError: On transport failures
        """
        if self._closed:
            raise RuntimeError("Client has been closed")

        url = self._url(path)
        kwargs: Dict[str, Any] = {"headers": self._headers(headers)}
        if query:
            kwargs["params"] = query
        if timeout is not None:
            kwargs["timeout"] = timeout

        response = await self._client.get(url, **kwargs)
        data = self._decode(response.text)

        logger.debug(
            f"AsyncFetchClient.get: {url} -> {response.status_code} "
            f"(has_body={data is not None})"
        )
        return FetchResponse(
            status=response.status_code,
            status_text=response.reason_phrase or "",
            headers=dict(response.headers),
            data=data,
            ok=200 <= response.status_code < 300,
        )

    async def close(self) -> None:
        self._closed = True
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncFetchClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
