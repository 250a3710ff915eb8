"""
Error taxonomy for Mercadolibre token resolution.

Every failure the pipeline can produce is raised as a single exception type,
MeliAuthSdkError, tagged with one ErrorCode.
"""
from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    """Stable discriminants for every classified failure."""

    ARN_NOT_FOUND = 1
    CREDENTIALS_NOT_FOUND = 2
    REMOTE_REQUEST_FAIL = 3
    TOKEN_NOT_FOUND = 4
    INVALID_CLIENT_NAME = 5
    INVALID_SELLER_ID = 6
    MALFORMED_RESPONSE = 7


class MeliAuthSdkError(Exception):
    """
    Classified failure raised by the token resolution pipeline.

    Attributes:
        message: Human-readable description
        code: ErrorCode discriminant
        cause_message: Message of the lower-level failure, if any
    """

    codes = ErrorCode
    name = "MeliAuthSdkError"

    def __init__(
        self,
        err: Any,
        code: ErrorCode,
        cause: Optional[BaseException] = None,
    ) -> None:
        message = err if isinstance(err, str) else str(err)
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)
        self.cause_message: Optional[str] = str(cause) if cause is not None else None
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"MeliAuthSdkError(code={self.code.name}, message={self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        result: Dict[str, Any] = {
            "name": self.name,
            "code": int(self.code),
            "message": self.message,
        }
        if self.cause_message is not None:
            result["cause"] = self.cause_message
        return result
