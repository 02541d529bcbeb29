"""Command-line front door for bolt.

Parses CLI options, wires up optional file logging and the persisted
settings, then hands the terminal over to the editor loop.
"""

from __future__ import annotations

import argparse
import logging

from .config import load_settings
from .constants import BOLT_VERSION
from .editor import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bolt", description="Small terminal text editor.")
    parser.add_argument("filename", help="File to edit. Created on first save if missing.")
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write diagnostic logs to this file (the terminal is in raw mode while editing).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level for --log-file (default: INFO).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {BOLT_VERSION}")
    return parser


def configure_logging(log_file: str | None, level: str) -> None:
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("bolt")
    root.addHandler(handler)
    root.setLevel(level)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    return run(args.filename, load_settings())


if __name__ == "__main__":
    raise SystemExit(main())
