from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import DEFAULT_VERSION
from .errors import ErrorCode, ResponseError


class PeerInfo(BaseModel):
    """Metadata the registry reports about itself (JSON marshalable)."""

    model_config = ConfigDict(extra="allow")

    tcp_port: int = 0
    http_port: int = 0
    version: str = ""
    broadcast_address: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PeerInfo":
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ResponseError(f"Peer info validation failed: {exc}", ErrorCode.INVALID_RESPONSE) from exc


class IdentifyBody(BaseModel):
    """What this node announces about itself in IDENTIFY."""

    version: str = Field(default=DEFAULT_VERSION, description="Software version of this node")
    tcp_port: int = Field(..., ge=0, le=65535)
    http_port: int = Field(..., ge=0, le=65535)
    hostname: str
    broadcast_address: Optional[str] = Field(default=None, description="Address other nodes should use")

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump()
        if not payload["broadcast_address"]:
            payload["broadcast_address"] = self.hostname
        return payload


__all__ = ["PeerInfo", "IdentifyBody"]
