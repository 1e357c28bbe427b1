"""Command line entrypoint for the Mapty web app."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mapty.core.config import DEFAULT_ZOOM_LEVEL, AppConfig, parse_location


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _location_arg(raw: str) -> tuple[float, float]:
    try:
        return parse_location(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Log running and cycling workouts on a map")
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for the web UI",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8089,
        help="Port for the web UI",
    )
    parser.add_argument(
        "--zoom",
        type=int,
        default=DEFAULT_ZOOM_LEVEL,
        help="Map zoom level used on startup and when focusing a workout",
    )
    parser.add_argument(
        "--storage",
        choices=["browser", "file", "memory"],
        default="browser",
        help="Where workouts are persisted: per browser, a shared JSON file, or nowhere",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="JSON file used with --storage file (default: ~/.mapty/storage.json)",
    )
    parser.add_argument(
        "--location",
        type=_location_arg,
        default=None,
        metavar="LAT,LNG",
        help="Use a fixed start location instead of asking the browser",
    )
    parser.add_argument(
        "--storage-secret",
        default="mapty-local-secret",
        help="Secret used to sign per-browser storage",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        host=args.web_host,
        port=args.web_port,
        zoom_level=args.zoom,
        storage=args.storage,
        data_path=args.data_file,
        location=args.location,
        storage_secret=args.storage_secret,
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)
    setup_logging(config.verbose)

    from mapty.ui.web_app import run_web_ui

    return run_web_ui(config)


if __name__ == "__main__":
    raise SystemExit(main())
