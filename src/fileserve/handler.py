"""Request handler that serves files beneath a fixed root directory."""
from __future__ import annotations

import functools
import logging
import os
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlsplit, urlunsplit


LOGGER = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"


class StaticFileHandler(SimpleHTTPRequestHandler):
    """Serve GET/HEAD requests from ``directory``.

    Path resolution, traversal filtering, index documents, directory
    listings and conditional GETs come from ``SimpleHTTPRequestHandler``.
    This class only adds the ``/index.html`` redirect, a few content types,
    and routes access lines through :mod:`logging`.
    """

    server_version = "fileserve"

    extensions_map = {
        **SimpleHTTPRequestHandler.extensions_map,
        ".js": "text/javascript",
        ".mjs": "text/javascript",
        ".json": "application/json",
        ".wasm": "application/wasm",
        ".webmanifest": "application/manifest+json",
    }

    def send_head(self):
        parts = urlsplit(self.path)
        if unquote(parts.path).endswith("/" + INDEX_DOCUMENT):
            location = urlunsplit(
                ("", "", parts.path[: parts.path.rfind("/") + 1], parts.query, "")
            )
            self.send_response(HTTPStatus.MOVED_PERMANENTLY)
            self.send_header("Location", location)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return None
        return super().send_head()

    def log_message(self, fmt: str, *args) -> None:
        LOGGER.info("%s - %s", self.address_string(), fmt % args)

    def log_error(self, fmt: str, *args) -> None:
        LOGGER.warning("%s - %s", self.address_string(), fmt % args)


def make_handler(root: Path | str) -> Callable[..., StaticFileHandler]:
    """Return a handler factory bound to ``root``."""
    return functools.partial(StaticFileHandler, directory=os.fspath(root))
