"""
Shared protocol package: registry commands, response framing, peer metadata
models and response validation.
"""

from .commands import Command, MsgType, identify, normalize_command, ping, register, unregister
from .constants import DEFAULT_MAX_BODY_SIZE, DEFAULT_VERSION, ENCODING, LOOKUP_TIMEOUT, MAGIC_V1
from .errors import (
    DialError,
    ErrorCode,
    FramingSizeError,
    ProtocolError,
    ReadError,
    ResponseError,
    ShortReadError,
    WriteError,
)
from .framing import encode_response, read_exact, read_response_bounded
from .messages import IdentifyBody, PeerInfo
from .validator import check_response, load_schema, parse_identify_response, validate_msg

__all__ = [
    "Command",
    "MsgType",
    "identify",
    "normalize_command",
    "ping",
    "register",
    "unregister",
    "DEFAULT_MAX_BODY_SIZE",
    "DEFAULT_VERSION",
    "ENCODING",
    "LOOKUP_TIMEOUT",
    "MAGIC_V1",
    "DialError",
    "ErrorCode",
    "FramingSizeError",
    "ProtocolError",
    "ReadError",
    "ResponseError",
    "ShortReadError",
    "WriteError",
    "encode_response",
    "read_exact",
    "read_response_bounded",
    "IdentifyBody",
    "PeerInfo",
    "check_response",
    "load_schema",
    "parse_identify_response",
    "validate_msg",
]
