from __future__ import annotations

import json

import pytest

from shared.protocol import ResponseError, check_response, load_schema, parse_identify_response
from shared.protocol.errors import ErrorCode


def test_identify_schema_is_available():
    schema = load_schema("IDENTIFY")
    assert schema is not None
    assert "tcp_port" in schema["required"]
    assert load_schema("PING") is None


def test_parse_identify_response():
    body = json.dumps(
        {"tcp_port": 4160, "http_port": 4161, "version": "1.2.1", "broadcast_address": "a", "hostname": "h"}
    ).encode()
    info = parse_identify_response(body)
    assert info is not None
    assert info.http_port == 4161
    assert json.loads(info.model_dump_json())["hostname"] == "h"


def test_error_body_raises():
    with pytest.raises(ResponseError, match="E_INVALID"):
        check_response(b"E_INVALID cannot IDENTIFY again")
    assert check_response(b"OK") == b"OK"


@pytest.mark.parametrize("body", [b"{not json", b"[1, 2]", b'{"tcp_port": 1}'])
def test_malformed_identify_response(body):
    with pytest.raises(ResponseError) as excinfo:
        parse_identify_response(body)
    assert excinfo.value.code == ErrorCode.INVALID_RESPONSE
