#!/usr/bin/env python3
"""Serve the current directory over HTTP.

Usage:
    python serve.py          # http://localhost:8000
    python serve.py 9090     # http://localhost:9090
"""
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from fileserve.cli import main  # noqa: E402


if __name__ == "__main__":  # pragma: no cover - manual execution
    main(sys.argv[1:])
