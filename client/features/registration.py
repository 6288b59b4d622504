from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from client.core.lookup_peer import LookupPeer
from shared.protocol import DEFAULT_MAX_BODY_SIZE, commands, validator
from shared.protocol.commands import Command
from shared.protocol.errors import ProtocolError
from shared.protocol.messages import IdentifyBody

logger = logging.getLogger(__name__)

Registration = Tuple[str, Optional[str]]


class RegistrationManager:
    """Announce this node to every configured registry and keep it announced.

    Acts as the reconnect handler of the peers it creates: each fresh
    connection is followed by IDENTIFY and a replay of all registrations.
    All peers are driven from the calling thread only.
    """

    def __init__(
        self,
        identity: IdentifyBody,
        max_body_size: int = DEFAULT_MAX_BODY_SIZE,
        peer_logger: Optional[logging.Logger] = logger,
    ) -> None:
        self.identity = identity
        self.max_body_size = max_body_size
        self.peer_logger = peer_logger
        self._peers: Dict[str, LookupPeer] = {}
        self._registrations: Set[Registration] = set()

    @property
    def peers(self) -> List[LookupPeer]:
        return list(self._peers.values())

    @property
    def registrations(self) -> List[Registration]:
        return sorted(self._registrations, key=lambda item: (item[0], item[1] or ""))

    def add_peer(self, address: str) -> LookupPeer:
        peer = self._peers.get(address)
        if peer is None:
            peer = LookupPeer(address, self.max_body_size, self.peer_logger, reconnect_handler=self)
            self._peers[address] = peer
        return peer

    def on_connect(self, peer: LookupPeer) -> None:
        try:
            resp = peer.command(commands.identify(self.identity.to_payload()))
            peer.info = validator.parse_identify_response(resp)
        except ProtocolError as exc:
            logger.error("LOOKUPD(%s): IDENTIFY failed: %s", peer, exc)
            return
        if peer.info is not None:
            logger.info("LOOKUPD(%s): peer info %s", peer, peer.info.model_dump_json())

        for topic, channel in self.registrations:
            # a rejected topic leaves the connection up; only a dropped peer ends the replay
            if not self._send(peer, commands.register(topic, channel)) and not peer.connected:
                return

    def connect_all(self) -> None:
        for peer in self.peers:
            self._connect(peer)

    def register(self, topic: str, channel: Optional[str] = None) -> None:
        self._registrations.add((topic, channel))
        cmd = commands.register(topic, channel)
        for peer in self.peers:
            if peer.connected:
                self._send(peer, cmd)
            else:
                # connecting replays every registration, this one included
                self._connect(peer)

    def unregister(self, topic: str, channel: Optional[str] = None) -> None:
        self._registrations.discard((topic, channel))
        if channel is None:
            # dropping a topic drops its channels too
            self._registrations = {item for item in self._registrations if item[0] != topic}
        self._broadcast(commands.unregister(topic, channel))

    def ping_all(self) -> None:
        self._broadcast(commands.ping())

    def close(self) -> None:
        for peer in self.peers:
            peer.close()

    def _broadcast(self, cmd: Command) -> None:
        for peer in self.peers:
            self._send(peer, cmd)

    def _connect(self, peer: LookupPeer) -> None:
        try:
            peer.command(None)
        except ProtocolError as exc:
            logger.warning("LOOKUPD(%s): connect failed: %s", peer, exc)

    def _send(self, peer: LookupPeer, cmd: Command) -> bool:
        try:
            validator.check_response(peer.command(cmd))
        except ProtocolError as exc:
            logger.error("LOOKUPD(%s): %s failed: %s", peer, cmd, exc)
            return False
        logger.debug("LOOKUPD(%s): %s ok", peer, cmd)
        return True


__all__ = ["RegistrationManager", "Registration"]
