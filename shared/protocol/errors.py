from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Domain specific error codes."""

    DIAL_FAILED = 1001
    WRITE_FAILED = 1002
    READ_FAILED = 1003
    SHORT_READ = 1004
    BODY_TOO_LARGE = 1005
    ERROR_RESPONSE = 1006
    INVALID_RESPONSE = 1007


class ProtocolError(Exception):
    """Structured protocol exception carrying code + message."""

    default_code = ErrorCode.READ_FAILED

    def __init__(self, message: str = "", code: Optional[ErrorCode] = None) -> None:
        self.code = code if code is not None else self.default_code
        self.message = message
        super().__init__(f"{self.code.name} ({int(self.code)}): {message}")


class DialError(ProtocolError):
    """Transport to the registry could not be established."""

    default_code = ErrorCode.DIAL_FAILED


class WriteError(ProtocolError):
    default_code = ErrorCode.WRITE_FAILED


class ReadError(ProtocolError):
    default_code = ErrorCode.READ_FAILED


class ShortReadError(ReadError):
    """Stream ended before the declared number of bytes arrived."""

    default_code = ErrorCode.SHORT_READ


class FramingSizeError(ProtocolError):
    """Declared response length is negative or above the configured ceiling."""

    default_code = ErrorCode.BODY_TOO_LARGE


class ResponseError(ProtocolError):
    """Registry answered with an ``E_*`` error body or an unparsable payload."""

    default_code = ErrorCode.ERROR_RESPONSE


__all__ = [
    "ErrorCode",
    "ProtocolError",
    "DialError",
    "WriteError",
    "ReadError",
    "ShortReadError",
    "FramingSizeError",
    "ResponseError",
]
