"""Protocol-wide constants for talking to the lookup registry."""

DEFAULT_VERSION = "1.0.0"
ENCODING = "utf-8"
MAGIC_V1 = b"  V1"
FRAME_SIZE_BYTES = 4
LOOKUP_TIMEOUT = 3.0  # seconds, dial and per read/write call
DEFAULT_MAX_BODY_SIZE = 5 * 1024 * 1024  # 5 MB upper bound for a single response
RESPONSE_OK = b"OK"
ERROR_PREFIX = b"E_"

__all__ = [
    "DEFAULT_VERSION",
    "ENCODING",
    "MAGIC_V1",
    "FRAME_SIZE_BYTES",
    "LOOKUP_TIMEOUT",
    "DEFAULT_MAX_BODY_SIZE",
    "RESPONSE_OK",
    "ERROR_PREFIX",
]
