from __future__ import annotations

import json
import struct
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Optional, Protocol, Union

from .constants import ENCODING


class MsgType(StrEnum):
    """Command names understood by the lookup registry."""

    IDENTIFY = "IDENTIFY"
    REGISTER = "REGISTER"
    UNREGISTER = "UNREGISTER"
    PING = "PING"


class Writer(Protocol):
    def write(self, data: bytes) -> int: ...


def normalize_command(command: Union[str, MsgType]) -> str:
    """Convert enum/string into canonical command text."""
    return command.value if isinstance(command, MsgType) else str(command)


@dataclass
class Command:
    """One registry request: ``NAME param...\\n`` plus an optional sized body."""

    name: Union[str, MsgType]
    params: List[str] = field(default_factory=list)
    body: Optional[bytes] = None

    def to_bytes(self) -> bytes:
        line = " ".join([normalize_command(self.name), *self.params]) + "\n"
        data = line.encode(ENCODING)
        if self.body is not None:
            data += struct.pack(">I", len(self.body)) + self.body
        return data

    def write_to(self, sink: Writer) -> int:
        """Write the serialized command to ``sink`` and return the bytes written."""
        return sink.write(self.to_bytes())

    def __str__(self) -> str:
        return " ".join([normalize_command(self.name), *self.params])


def identify(payload: Dict[str, Any]) -> Command:
    body = json.dumps(payload, separators=(",", ":")).encode(ENCODING)
    return Command(MsgType.IDENTIFY, body=body)


def register(topic: str, channel: Optional[str] = None) -> Command:
    params = [topic] if channel is None else [topic, channel]
    return Command(MsgType.REGISTER, params)


def unregister(topic: str, channel: Optional[str] = None) -> Command:
    params = [topic] if channel is None else [topic, channel]
    return Command(MsgType.UNREGISTER, params)


def ping() -> Command:
    return Command(MsgType.PING)


__all__ = [
    "MsgType",
    "Writer",
    "Command",
    "normalize_command",
    "identify",
    "register",
    "unregister",
    "ping",
]
