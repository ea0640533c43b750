"""
Console host start script — runs the whitelist against stdin or a script file.

Usage:
    python main.py
    python main.py --file /srv/fx/SimpleWhitelist.txt --log-level DEBUG
    python main.py --script events.txt
"""

from __future__ import annotations

import argparse
import sys

from host.console import ConsoleHost
from simple_whitelist import WhitelistStore
from simple_whitelist.log import DEFAULT_LEVEL, LEVELS, configure_logging
from simple_whitelist.store import DEFAULT_FILE


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the simple-whitelist console")
    parser.add_argument(
        "--file", default=DEFAULT_FILE, help=f"Whitelist file (default: {DEFAULT_FILE})"
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LEVEL,
        type=str.upper,
        choices=LEVELS,
        help=f"Log level (default: {DEFAULT_LEVEL})",
    )
    parser.add_argument(
        "--script", default=None, help="Read events from this file instead of stdin"
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    host = ConsoleHost(WhitelistStore(args.file), out=sys.stdout)
    host.start()
    if args.script is None:
        host.run(sys.stdin)
        return
    with open(args.script, encoding="utf-8") as fh:
        host.run(fh)


if __name__ == "__main__":
    main()
