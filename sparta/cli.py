# sparta — template renderer with secret-store integration
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Command line entrypoint.

Usage::

    sparta -t manifests/ -c envs/staging.yaml -c envs/prod.yaml -o out/
"""

from __future__ import annotations

import argparse
import logging
import sys

from sparta import __version__
from sparta.runner import run

logger = logging.getLogger("sparta")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparta",
        description="A template processor with secrets integrations",
    )
    parser.add_argument(
        "-t", "--template", help="Path to template file or directory",
    )
    parser.add_argument(
        "-c", "--config", action="append", default=[], metavar="FILE",
        help="Path to a config file (repeatable)",
    )
    parser.add_argument(
        "-o", "--output", metavar="DIR",
        help="Output directory (if not specified, outputs to stdout)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show version information",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s"
    ))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"sparta version {__version__}")
        return 0
    if not args.template:
        parser.error("the --template/-t argument is required")

    _configure_logging(args.verbose)
    if not args.config:
        logger.warning("No config files given; nothing to render")
        return 0

    result = run(args.template, args.config, args.output)
    for config_file, exc in result.failures:
        logger.error("Error: processing config %s: %s", config_file, exc)
    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover - CLI
    sys.exit(main())
