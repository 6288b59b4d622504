from __future__ import annotations

import socket
from typing import Tuple


def split_address(address: str) -> Tuple[str, int]:
    """Split ``host:port`` (or ``[v6]:port``) into a host/port pair."""
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"address {address!r} is missing a port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_number = int(port)
    except ValueError as exc:
        raise ValueError(f"address {address!r} has a non-numeric port") from exc
    if not (0 < port_number <= 65535):
        raise ValueError(f"address {address!r} has an out of range port")
    return host, port_number


def default_hostname() -> str:
    """Local hostname used when no broadcast address is configured."""
    return socket.gethostname()


__all__ = ["split_address", "default_hostname"]
