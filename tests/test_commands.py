from __future__ import annotations

import json
import struct

from shared.protocol import Command, MsgType, identify, ping, register, unregister


class Sink:
    def __init__(self) -> None:
        self.data = b""

    def write(self, data: bytes) -> int:
        self.data += data
        return len(data)


def test_ping_has_no_params_or_body():
    assert ping().to_bytes() == b"PING\n"


def test_register_with_and_without_channel():
    assert register("orders").to_bytes() == b"REGISTER orders\n"
    assert register("orders", "billing").to_bytes() == b"REGISTER orders billing\n"
    assert unregister("orders", "billing").to_bytes() == b"UNREGISTER orders billing\n"


def test_identify_carries_sized_json_body():
    data = identify({"tcp_port": 4150, "hostname": "node-1"}).to_bytes()
    header, rest = data.split(b"\n", 1)
    assert header == b"IDENTIFY"
    (size,) = struct.unpack(">I", rest[:4])
    assert size == len(rest) - 4
    assert json.loads(rest[4:]) == {"tcp_port": 4150, "hostname": "node-1"}


def test_write_to_reports_bytes_written():
    sink = Sink()
    cmd = Command("PING")
    assert cmd.write_to(sink) == 5
    assert sink.data == b"PING\n"


def test_command_names():
    assert str(register("orders", "billing")) == "REGISTER orders billing"
    assert ping().name == MsgType.PING
