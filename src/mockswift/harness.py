"""Run MockSwift on a real socket from inside a test process.

:class:`SwiftServer` serves the app with uvicorn on a background thread and
advertises the auth and storage base URLs a Swift client needs::

    with SwiftServer() as srv:
        client = SwiftClient(auth_url=srv.auth_url, user="test", key="test")
        ...
"""

import ipaddress
import logging
import socket
import threading
import time

import uvicorn

from mockswift.config import MockSwiftConfig
from mockswift.server import create_app, create_store
from mockswift.storage import SwiftStore

logger = logging.getLogger(__name__)


def discover_host_ip() -> str:
    """Return the first global unicast IPv4 address of this host.

    Private ranges count as global unicast; loopback, link-local, multicast
    and unspecified addresses do not. Falls back to 127.0.0.1 when the host
    name does not resolve to a usable address.
    """
    try:
        _, _, addresses = socket.gethostbyname_ex(socket.gethostname())
    except OSError:
        addresses = []
    for address in addresses:
        ip = ipaddress.IPv4Address(address)
        if ip.is_loopback or ip.is_link_local or ip.is_multicast or ip.is_unspecified:
            continue
        if ip == ipaddress.IPv4Address("255.255.255.255"):
            continue
        return address
    return "127.0.0.1"


class SwiftServer:
    """A MockSwift instance listening on a TCP port.

    Attributes:
        config: The configuration the app was built with.
        store: The in-memory store backing the server. Test code touching it
            directly should hold ``store.lock``.
        port: The bound port (resolved when ``server.port`` is 0).
        auth_url: ``http://<ip>:<port>/auth/v1.0``.
        url: ``http://<ip>:<port>/v1``.
    """

    def __init__(
        self,
        config: MockSwiftConfig | None = None,
        store: SwiftStore | None = None,
        host: str | None = None,
        startup_timeout: float = 10.0,
    ) -> None:
        self.config = config if config is not None else MockSwiftConfig()
        self.store = store if store is not None else create_store(self.config)
        self.app = create_app(self.config, store=self.store)

        self._server = uvicorn.Server(
            uvicorn.Config(
                self.app,
                host=self.config.server.host,
                port=self.config.server.port,
                log_level=self.config.server.log_level.lower(),
                timeout_graceful_shutdown=self.config.server.shutdown_timeout,
                lifespan="off",
            )
        )
        self._thread = threading.Thread(target=self._server.run, name="mockswift", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + startup_timeout
        while not self._server.started:
            if not self._thread.is_alive():
                raise RuntimeError(
                    f"MockSwift failed to start on {self.config.server.host}:{self.config.server.port}"
                )
            if time.monotonic() > deadline:
                self.close()
                raise RuntimeError("Timed out waiting for MockSwift to start")
            time.sleep(0.01)

        self.port = self._server.servers[0].sockets[0].getsockname()[1]
        advertised = host or discover_host_ip()
        base = f"http://{advertised}:{self.port}"
        self.auth_url = f"{base}/auth/v1.0"
        self.url = f"{base}/v1"
        logger.info("AuthURL %s URL %s", self.auth_url, self.url)

    def close(self) -> None:
        """Stop serving and wait for the server thread to exit."""
        self._server.should_exit = True
        self._thread.join()

    def __enter__(self) -> "SwiftServer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
