"""dirstream entry point.

Usage::

  dirstream                         Start the API server (same as ``serve``)
  dirstream serve --port 4000       Start on a specific port
  dirstream --root ./backend/data   Expose a different root directory
  dirstream --dev                   Auto-reload on source changes
"""

import argparse
import logging
import os
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from dirstream.config import get_settings
from dirstream.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return get_version("dirstream")
    except PackageNotFoundError:
        from dirstream import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirstream",
        description="Stream directory listings under a fixed root as NDJSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("command", nargs="?", default="serve", choices=["serve"])
    parser.add_argument("--host", default=None, help="Host to bind (default: settings)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (default: settings)")
    parser.add_argument("--root", default=None, help="Root directory to expose (overrides DATA_ROOT)")
    parser.add_argument("--dev", action="store_true", help="Run with auto-reload")
    parser.add_argument("--log-level", default=None, help="Logging level (default: settings)")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {_version()}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.root:
        # Through the environment so the --dev reloader process sees it too.
        os.environ["DATA_ROOT"] = args.root
        get_settings.cache_clear()

    settings = get_settings()
    setup_logging(level=args.log_level or settings.log_level)

    from dirstream.api.serve import run_api_server

    run_api_server(
        host=args.host or settings.host,
        port=args.port or settings.port,
        dev=args.dev,
    )


if __name__ == "__main__":
    main()
