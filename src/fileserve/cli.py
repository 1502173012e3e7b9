"""Command-line entry point: ``fileserve [port]``."""
from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from fileserve.server import DEFAULT_PORT, ServerConfig, run


LOGGER = logging.getLogger(__name__)


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fileserve",
        description="Serve files from the current directory over HTTP",
    )
    parser.add_argument(
        "port",
        nargs="?",
        default=DEFAULT_PORT,
        help=f"Port number or service name to listen on (default: {DEFAULT_PORT})",
    )
    args, ignored = parser.parse_known_args(argv)
    args.ignored = ignored
    return args


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)
    if args.ignored:
        LOGGER.warning("Ignoring extra arguments: %s", " ".join(args.ignored))

    config = ServerConfig(port=args.port, root=Path("."))
    # signal handlers can only be installed from the main thread
    on_main_thread = threading.current_thread() is threading.main_thread()
    if on_main_thread:
        previous_handler = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        run(config)
    except KeyboardInterrupt:
        LOGGER.info("Server stopped")
    except (OSError, ValueError) as exc:
        LOGGER.critical("Server on %s failed: %s", config.address, exc)
        raise SystemExit(1) from exc
    finally:
        if on_main_thread:
            if previous_handler is None:
                previous_handler = signal.SIG_DFL
            signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main(sys.argv[1:])
