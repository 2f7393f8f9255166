#!/usr/bin/env python3
"""Entry point of the struct-stats command line."""

import argparse
import sys

from .. import __version__
from ..utils.logger import StatsLogger, set_logger
from .commands import analyze, bonds

COMMANDS = (analyze, bonds)


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subparser per command module."""
    parser = argparse.ArgumentParser(
        prog="struct-stats",
        description="Radial distribution, coordination and bond-angle statistics of periodic structures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Analyze a structure with default settings:
    struct-stats analyze POSCAR

  Custom cutoff and bond factor:
    struct-stats analyze sio2.cif --cutoff 8 --bond-factor 1.3 --output-prefix sio2

  Check which element pairs count as bonded before a run:
    struct-stats bonds sio2.cif --bond-factor 1.3

For more help on a command:
    struct-stats analyze --help
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Show debug messages")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Show errors only")

    subparsers = parser.add_subparsers(title="Commands", dest="command", required=True)
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (None = sys.argv)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = create_parser().parse_args(argv)
    set_logger(StatsLogger(verbose=args.verbose, quiet=args.quiet))
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
