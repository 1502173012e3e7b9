"""Threaded HTTP listener for the static file server."""
from __future__ import annotations

import contextlib
import logging
import socket
from dataclasses import dataclass, field
from http.server import ThreadingHTTPServer
from pathlib import Path

from fileserve.handler import make_handler


LOGGER = logging.getLogger(__name__)

DEFAULT_PORT = "8000"
MAX_PORT = 65535


@dataclass(frozen=True)
class ServerConfig:
    port: str = DEFAULT_PORT
    root: Path = field(default_factory=lambda: Path("."))
    host: str = ""

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class StaticFileServer(ThreadingHTTPServer):
    """One daemon thread per connection, all sharing a read-only root."""

    daemon_threads = True

    def __init__(self, server_address: tuple[str, int], root: Path, bind_and_activate: bool = True) -> None:
        self.root = root
        # an empty host listens on every interface, IPv6 included when available
        if not server_address[0] and socket.has_dualstack_ipv6():
            self.address_family = socket.AF_INET6
        super().__init__(server_address, make_handler(root), bind_and_activate)

    def server_bind(self) -> None:
        if self.address_family == socket.AF_INET6:
            with contextlib.suppress(Exception):
                self.socket.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
        super().server_bind()

    @property
    def port(self) -> int:
        return self.server_address[1]

    @property
    def bound_url(self) -> str:
        return f"http://localhost:{self.port}"

    def handle_error(self, request, client_address) -> None:
        LOGGER.exception("Error while handling request from %s", client_address[0])


def resolve_port(port: str) -> int:
    """Turn a port number or TCP service name (``"http"``) into a port."""
    if not port:
        raise ValueError("port must not be empty")
    if port.isascii() and port.isdigit():
        number = int(port)
        if number > MAX_PORT:
            raise ValueError(f"port out of range: {port}")
        return number
    try:
        return socket.getservbyname(port, "tcp")
    except OSError as exc:
        raise OSError(f"unknown port or service name: {port!r}") from exc


def _resolve_root(root: Path) -> Path:
    resolved = Path(root).resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"root directory not found: {resolved}")
    if not resolved.is_dir():
        raise NotADirectoryError(f"root is not a directory: {resolved}")
    return resolved


def build_server(config: ServerConfig) -> StaticFileServer:
    root = _resolve_root(config.root)
    port = resolve_port(config.port)
    return StaticFileServer((config.host, port), root)


def run(config: ServerConfig) -> None:
    """Log the startup URL, bind the listener and serve until interrupted."""
    LOGGER.info("Starting server on %s", config.url)
    with build_server(config) as server:
        LOGGER.info("Serving %s at %s", server.root, server.bound_url)
        server.serve_forever()
