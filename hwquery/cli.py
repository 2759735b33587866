#!/usr/bin/env python3
"""
hwquery command line

Flow:
- flags come from an optional YAML config file, overridden by the command line
- positional tokens are parsed once into query invocations; malformed command
  lines fail before anything is read or printed
- every cycle refreshes the data provider once, resolves all invocations from
  that snapshot and prints either delimiter-joined values or one templated
  row per invocation
- cycles repeat --count times with --interval between them

Errors go to stderr with a distinct exit code per error class; values go to
stdout only.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .catalog import CATALOG
from .config import DEFAULT_CONFIG_PATH, LOG_LEVELS, AppConfig
from .errors import HwQueryError
from .formatter import OutputFormatter
from .help import command_help, commands_overview
from .parser import parse_invocations, validate_template
from .provider import DataProvider, PsutilProvider
from .resolver import SnapshotResolver
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hwquery",
        description="Query information about the system and hardware in a scriptable way.",
        epilog=commands_overview(CATALOG),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--delimiter", "-d",
                        help="separator between values; escape sequences such as \\t are allowed "
                             "(default: newline)")
    parser.add_argument("--fmt", "-f",
                        help="format string with %%QUERY%% specifiers replaced by values of each "
                             "command; %%%% yields a literal percent sign")
    parser.add_argument("--unit", "-u",
                        help="unit for byte values: bits, bytes, kb, kib, mb, mib, gb, gib, tb, tib "
                             "(default: bytes)")
    parser.add_argument("--count", "-n",
                        help="how many times to run the commands (default: 1)")
    parser.add_argument("--interval", "-I",
                        help="pause between runs, e.g. 500ms, 1s, 2m (default: 0)")
    parser.add_argument("--config", "-c", type=Path, default=DEFAULT_CONFIG_PATH,
                        help=f"YAML configuration file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        help="logging level for diagnostics on stderr (default: WARNING)")
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("commands", nargs="*", metavar="COMMAND",
                        help="command followed by its name argument and queries")
    return parser


def run(args: argparse.Namespace, provider: Optional[DataProvider] = None) -> int:
    """Parse, validate and run the scheduled cycles; returns the exit code."""
    config = AppConfig.from_file(args.config).override_with_args(args)

    try:
        logging.basicConfig(level=config.logging_level())
        output = config.output_config()
        schedule = config.schedule_config()

        invocations = parse_invocations(args.commands, CATALOG)
        placeholders: List[str] = []
        if output.format_template is not None:
            placeholders = validate_template(output.format_template, invocations, CATALOG)

        logger.info("running %d invocation(s) %d time(s), interval %.3fs",
                    len(invocations), schedule.repeat_count, schedule.interval)

        scheduler = Scheduler(
            invocations,
            SnapshotResolver(provider or PsutilProvider(), CATALOG),
            OutputFormatter(output),
            schedule,
            placeholders=placeholders,
        )
        cycles = scheduler.run()
        logger.debug("finished after %d cycle(s)", cycles)
    except HwQueryError as e:
        sys.stdout.flush()
        print(f"hwquery: error: {e}", file=sys.stderr)
        return e.exit_code

    return 0


def main(argv: Optional[List[str]] = None, provider: Optional[DataProvider] = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    if args.commands and args.commands[0].lower() == "help":
        try:
            if len(args.commands) > 1:
                print(command_help(args.commands[1], CATALOG))
            else:
                parser.print_help()
        except HwQueryError as e:
            print(f"hwquery: error: {e}", file=sys.stderr)
            return e.exit_code
        return 0

    if not args.commands:
        parser.error("a command is required")

    try:
        return run(args, provider)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
