from .lookup_peer import LookupPeer, PeerState, ReconnectHandler

__all__ = ["LookupPeer", "PeerState", "ReconnectHandler"]
