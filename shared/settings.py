from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from shared.protocol import DEFAULT_VERSION, IdentifyBody
from shared.utils import default_hostname


@dataclass
class Settings:
    """Identity of this node as announced to the registry."""

    hostname: str = field(default_factory=default_hostname)
    broadcast_address: Optional[str] = None
    tcp_port: int = 4150
    http_port: int = 4151
    version: str = DEFAULT_VERSION

    def identify_body(self) -> IdentifyBody:
        return IdentifyBody(
            version=self.version,
            tcp_port=self.tcp_port,
            http_port=self.http_port,
            hostname=self.hostname,
            broadcast_address=self.broadcast_address,
        )


SETTINGS = Settings()


def load_settings(env_path: str = ".env") -> Settings:
    """Load node identity from env/.env."""
    if Path(env_path).exists():
        load_dotenv(env_path)
    SETTINGS.hostname = os.getenv("NODE_HOSTNAME", SETTINGS.hostname)
    SETTINGS.broadcast_address = os.getenv("NODE_BROADCAST_ADDRESS") or SETTINGS.broadcast_address
    SETTINGS.tcp_port = int(os.getenv("NODE_TCP_PORT", SETTINGS.tcp_port))
    SETTINGS.http_port = int(os.getenv("NODE_HTTP_PORT", SETTINGS.http_port))
    SETTINGS.version = os.getenv("NODE_VERSION", SETTINGS.version)
    return SETTINGS


__all__ = ["Settings", "SETTINGS", "load_settings"]
