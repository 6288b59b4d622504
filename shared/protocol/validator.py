from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .commands import MsgType, normalize_command
from .constants import ENCODING, ERROR_PREFIX, RESPONSE_OK
from .errors import ErrorCode, ResponseError
from .messages import PeerInfo

SCHEMA_DIR = Path(__file__).parent / "schemas"

# Mapping command -> response schema filename (relative to SCHEMA_DIR)
SCHEMA_REGISTRY: Dict[str, str] = {
    MsgType.IDENTIFY.value: "identify_response.json",
}


@lru_cache(maxsize=16)
def load_schema(command: str) -> Optional[dict]:
    """Load the response JSON schema for command if present."""
    filename = SCHEMA_REGISTRY.get(normalize_command(command))
    if not filename:
        return None
    path = SCHEMA_DIR / filename
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fp:
        return json.load(fp)


def check_response(body: bytes) -> bytes:
    """Raise ResponseError when the registry answered with an ``E_*`` body."""
    if body.startswith(ERROR_PREFIX):
        raise ResponseError(body.decode(ENCODING, errors="replace"))
    return body


def validate_msg(msg: Dict[str, Any], schema: Optional[dict]) -> None:
    if not schema:
        return
    try:
        jsonschema.validate(instance=msg, schema=schema)
    except jsonschema.ValidationError as exc:
        raise ResponseError(f"Schema validation failed: {exc.message}", ErrorCode.INVALID_RESPONSE) from exc


def parse_identify_response(body: bytes) -> Optional[PeerInfo]:
    """Turn the IDENTIFY answer into PeerInfo; a bare ``OK`` carries no metadata."""
    check_response(body)
    if body == RESPONSE_OK:
        return None
    try:
        data = json.loads(body.decode(ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ResponseError(f"Decode failed: {exc}", ErrorCode.INVALID_RESPONSE) from exc
    if not isinstance(data, dict):
        raise ResponseError("IDENTIFY response is not an object", ErrorCode.INVALID_RESPONSE)
    validate_msg(data, load_schema(MsgType.IDENTIFY))
    return PeerInfo.from_dict(data)


__all__ = ["load_schema", "check_response", "validate_msg", "parse_identify_response"]
