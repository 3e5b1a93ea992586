"""Command-line arguments of the sidecar."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

DEFAULT_EXEX_SOCKET = "/tmp/glint-exex.sock"
DEFAULT_FLIGHT_PORT = 50051
DEFAULT_HEALTH_PORT = 8080
DEFAULT_DB_PATH = "glint-sidecar.db"

_U16_MAX = (1 << 16) - 1
_U64_MAX = (1 << 64) - 1


def _bounded_int(maximum: int, what: str):
    def convert(text: str) -> int:
        try:
            value = int(text, 10)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid {what}: {text!r}") from None
        if not 0 <= value <= maximum:
            raise argparse.ArgumentTypeError(f"{what} out of range 0..={maximum}: {value}")
        return value

    return convert


_port = _bounded_int(_U16_MAX, "port")
_block = _bounded_int(_U64_MAX, "block number")


def _add_db_path(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--db-path", type=Path, default=Path(DEFAULT_DB_PATH))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glint-sidecar",
        description="Unified DB sidecar for Glint: live + historical entity queries",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run")
    run.add_argument("--exex-socket", type=Path, default=Path(DEFAULT_EXEX_SOCKET))
    run.add_argument("--flight-port", type=_port, default=DEFAULT_FLIGHT_PORT)
    run.add_argument("--health-port", type=_port, default=DEFAULT_HEALTH_PORT)
    _add_db_path(run)

    db = commands.add_parser("db")
    db_commands = db.add_subparsers(dest="db_command", required=True)

    rebuild = db_commands.add_parser("rebuild")
    rebuild.add_argument("--rpc-url", required=True)
    rebuild.add_argument("--from-block", type=_block, default=0)
    _add_db_path(rebuild)

    status = db_commands.add_parser("status")
    _add_db_path(status)

    prune = db_commands.add_parser("prune")
    prune.add_argument("--before-block", type=_block, required=True)
    _add_db_path(prune)

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse sidecar arguments; exit with a usage error on bad input."""
    return _build_parser().parse_args(argv)