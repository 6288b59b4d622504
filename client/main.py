from __future__ import annotations

import logging
import time

from client.config import CLIENT_CONFIG, load_config
from client.features import RegistrationManager
from shared.settings import load_settings

logger = logging.getLogger(__name__)


def run_client() -> None:
    logging.basicConfig()
    settings = load_settings()
    load_config()

    manager = RegistrationManager(settings.identify_body(), CLIENT_CONFIG["max_body_size"])
    for address in CLIENT_CONFIG["lookupd_tcp_addresses"]:
        manager.add_peer(address)

    try:
        manager.connect_all()
        for topic in CLIENT_CONFIG["topics"]:
            manager.register(topic)

        while True:
            time.sleep(CLIENT_CONFIG["ping_interval"])
            manager.ping_all()
    except KeyboardInterrupt:
        logger.info("Interrupted, closing registry connections")
    finally:
        manager.close()


if __name__ == "__main__":
    run_client()
