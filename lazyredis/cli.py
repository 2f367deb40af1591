"""Command-line front door for lazyredis.

Parses CLI options, loads connection settings, and configures logging.
Then either runs the connection self-test or the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .keyspace import DELETE_BATCH_SIZE, SCAN_BATCH_SIZE
from .runtime.settings import SettingsError, load_settings
from .store.tunnel import TunnelError
from .ui_theme import available_theme_names

logger = logging.getLogger("lazyredis")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyredis",
        description="Browse, search, and delete Redis keys in a terminal UI.",
    )
    parser.add_argument("--env", metavar="NAME", default=None, help="Load .env.NAME instead of .env.")
    parser.add_argument("--test-conn", action="store_true", help="Test the connection and exit.")
    parser.add_argument("--pattern", default="*", help="Initial SCAN match pattern (default: *).")
    parser.add_argument("--tree", action="store_true", help="Start in tree view.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default="monokai", help="Pygments style name for JSON values.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write debug logs to PATH.")
    parser.add_argument(
        "--scan-count",
        type=_positive_int,
        default=SCAN_BATCH_SIZE,
        help=f"COUNT hint per SCAN call (default: {SCAN_BATCH_SIZE}).",
    )
    parser.add_argument(
        "--delete-batch",
        type=_positive_int,
        default=DELETE_BATCH_SIZE,
        help=f"Keys per DEL call during folder deletes (default: {DELETE_BATCH_SIZE}).",
    )
    return parser


def configure_logging(log_file: str | None) -> None:
    """Log to ``log_file`` when given; otherwise keep the terminal clean."""
    if log_file:
        logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT, errors="backslashreplace")
    else:
        logger.addHandler(logging.NullHandler())


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser or the connection test."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    try:
        settings = load_settings(args.env)
    except SettingsError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    if args.test_conn:
        from .store.diagnostics import run_connection_test

        sys.exit(run_connection_test(settings))

    from .runtime.app import BrowserOptions, run_browser

    options = BrowserOptions(
        pattern=args.pattern,
        tree_mode=args.tree,
        theme=args.theme,
        style=args.style,
        no_color=args.no_color,
        scan_batch_size=args.scan_count,
        delete_batch_size=args.delete_batch,
    )
    try:
        run_browser(settings, options)
    except TunnelError as exc:
        raise SystemExit(str(exc)) from exc
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logger.exception("browser failed")
        raise SystemExit(f"Failed to start Redis Browser: {exc}") from exc


if __name__ == "__main__":
    main()
