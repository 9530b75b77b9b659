"""CLI entry point: parse args, load config, dispatch command handlers."""

from __future__ import annotations

import logging
import sys

from codescore.cli_parser import build_parser
from codescore.commands import get_command_handlers
from codescore.config import load_config
from codescore.utils import colorize

logger = logging.getLogger(__name__)


def create_parser():
    """Return the top-level argparse parser."""
    return build_parser()


def main(argv: list[str] | None = None) -> None:
    # Ensure Unicode output works on Windows terminals (cp1252 etc.)
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8", errors="replace")
            except (AttributeError, OSError, ValueError):
                logger.debug(
                    "Skipping stream reconfigure for %s (not supported)",
                    getattr(stream, "name", "<stream>"),
                )

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        args.config = load_config()
        handler = get_command_handlers()[args.command]
        handler(args)
    except ValueError as exc:
        # InputTooLargeError and LeaderboardLoadError land here too
        print(colorize(f"  {exc}", "red", sys.stderr), file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(colorize(f"  {exc}", "red", sys.stderr), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
