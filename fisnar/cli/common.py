"""
Argument and logging plumbing shared by the command-line tools.
"""

import argparse
import logging
import re
import sys

from fisnar.config import LOG_LEVEL_DEFAULT, READ_TIMEOUT_S, SERIAL_PORT_DEFAULT, TRACE

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# "-1,2,3", "-.5" ... a value, not an option
_SIGNED_VALUE = re.compile(r"^-\.?\d")


class ArgumentParser(argparse.ArgumentParser):
    """
    argparse parser that exits with status 1 on usage errors.

    Options listed in ``signed_value_options`` always take the next argument
    as their value, so ``--offset -1,2,3`` works as well as ``--offset=-1,2,3``.
    """

    def __init__(self, *args, signed_value_options: tuple[str, ...] = (), **kwargs):
        super().__init__(*args, **kwargs)
        self.signed_value_options = signed_value_options

    def parse_known_args(self, args=None, namespace=None):
        if args is None:
            args = sys.argv[1:]
        return super().parse_known_args(self._join_signed_values(list(args)), namespace)

    def _join_signed_values(self, args: list[str]) -> list[str]:
        out: list[str] = []
        i = 0
        while i < len(args):
            arg = args[i]
            if arg == "--":
                out.extend(args[i:])
                break
            nxt = args[i + 1] if i + 1 < len(args) else None
            if arg in self.signed_value_options and nxt is not None and _SIGNED_VALUE.match(nxt):
                out.append(f"{arg}={nxt}")
                i += 2
                continue
            out.append(arg)
            i += 1
        return out

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"ERROR: {message}\n")


def add_device_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--port', default=SERIAL_PORT_DEFAULT,
                        help=f'Serial port (default: {SERIAL_PORT_DEFAULT})')
    parser.add_argument('--timeout', type=float, default=READ_TIMEOUT_S,
                        help='Seconds to wait for each device reply')
    parser.add_argument('--fake-serial', action='store_true',
                        help='Talk to the built-in simulator instead of a serial port')


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Enable quiet logging (WARNING level)')
    parser.add_argument('--log-level', choices=LOG_LEVELS,
                        help='Set specific log level')


def resolve_log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        if args.log_level == 'TRACE':
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    return getattr(logging, LOG_LEVEL_DEFAULT.upper(), logging.INFO)


def configure_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(
        level=resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
