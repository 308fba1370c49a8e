"""
CLI entry point for the fisnar-ports command.

Homes the robot and switches a range of digital outputs, one at a time.
Useful for finding which output drives which valve or dispenser.
"""

import argparse
import logging
import sys

from fisnar.cli.common import ArgumentParser, add_device_arguments, add_logging_arguments, configure_logging
from fisnar.driver import F4200N

logger = logging.getLogger("fisnar.cli.ports")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='fisnar-ports', description='Exercise F4200N digital outputs')
    add_device_arguments(parser)
    parser.add_argument('--first', type=int, default=8, help='First output port')
    parser.add_argument('--last', type=int, default=31, help='Last output port (inclusive)')
    parser.add_argument('--off', action='store_true', help='Switch the outputs off instead of on')
    add_logging_arguments(parser)
    return parser


def execute(args: argparse.Namespace) -> None:
    if args.last < args.first:
        raise ValueError(f"--last ({args.last}) is below --first ({args.first})")

    enabled = not args.off
    transport_type = 'mock' if args.fake_serial else None

    with F4200N.open(args.port, transport_type=transport_type, timeout=args.timeout) as machine:
        machine.home()
        for port in range(args.first, args.last + 1):
            logger.info(f"OUT {port},{1 if enabled else 0}")
            machine.output(port, enabled)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args)

    try:
        execute(args)
    except KeyboardInterrupt:
        print("ERROR: interrupted", file=sys.stderr)
        return 1
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


def main_entry():
    """Entry point for the fisnar-ports command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
