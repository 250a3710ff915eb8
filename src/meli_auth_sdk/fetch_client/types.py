"""
Type definitions for fetch_client.
"""
from typing import Any, Dict, Optional, TypedDict, Union

QueryParams = Dict[str, Union[str, int]]


class FetchResponse(TypedDict):
    """Decoded response: data is the JSON body, the raw text, or None when empty."""

    status: int
    status_text: str
    headers: Dict[str, str]
    data: Optional[Any]
    ok: bool
