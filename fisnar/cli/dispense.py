"""
CLI entry point for the fisnar-dxf command.

Converts a DXF drawing into dispense paths and runs them on the robot.
"""

import argparse
import logging
import sys

from fisnar.cli.common import ArgumentParser, add_device_arguments, add_logging_arguments, configure_logging
from fisnar.config import DOT_TIME_MS_DEFAULT, SCALE_DEFAULT, SPEED_MM_S_DEFAULT, Z_HOP_MM_DEFAULT
from fisnar.driver import F4200N
from fisnar.paths import extract_paths, transform_paths
from fisnar.paths.dxf_source import read_entities
from fisnar.sequencer import MotionSequencer, SequencerConfig
from fisnar.utils.geometry import Point3

logger = logging.getLogger("fisnar.cli.dispense")


def parse_offset(text: str) -> Point3:
    """Parse 'X[,Y[,Z]]' in mm; missing axes are zero."""
    try:
        values = [float(p) for p in text.split(",") if p.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid offset '{text}', expected X,Y,Z in mm")
    if len(values) > 3:
        raise argparse.ArgumentTypeError(f"invalid offset '{text}', expected at most 3 values")
    while len(values) < 3:
        values.append(0.0)
    return Point3(*values)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='fisnar-dxf',
        description='Dispense a DXF drawing on a Fisnar F4200N robot',
        signed_value_options=('--offset',),
    )
    parser.add_argument('filename', metavar='FILE.dxf', help='Drawing to dispense')
    add_device_arguments(parser)
    parser.add_argument('--speed', type=float, default=SPEED_MM_S_DEFAULT,
                        help='Speed, in mm/second')
    parser.add_argument('--dot-time-ms', type=int, default=DOT_TIME_MS_DEFAULT,
                        help='Dot extrusion time, in milliseconds')
    parser.add_argument('--dispense', action='store_true',
                        help='Dispense (otherwise trace the paths dry)')
    parser.add_argument('--offset', type=parse_offset, default=Point3(0.0, 0.0, 0.0),
                        help='X,Y,Z offset of work plane, in mm')
    parser.add_argument('--z-hop', type=float, default=Z_HOP_MM_DEFAULT,
                        help='Hop in Z when moving between dispense lines')
    parser.add_argument('--scale', type=float, default=SCALE_DEFAULT,
                        help='Scale output by this value')
    parser.add_argument('--stitch-first', action='store_true',
                        help='Also join the second path onto the first when their ends meet')
    add_logging_arguments(parser)
    return parser


def execute(args: argparse.Namespace) -> None:
    paths = extract_paths(read_entities(args.filename), stitch_first=args.stitch_first)
    if not paths:
        logger.warning(f"No dispensable paths in {args.filename}")
        return

    paths = transform_paths(paths, scale=args.scale, offset=args.offset)
    logger.info(f"{len(paths)} path(s), {sum(len(p) for p in paths)} point(s)")

    config = SequencerConfig(
        speed_mm_s=args.speed,
        dot_time_ms=args.dot_time_ms,
        dispense=args.dispense,
        z_hop_mm=args.z_hop,
    )
    transport_type = 'mock' if args.fake_serial else None

    with F4200N.open(args.port, transport_type=transport_type, timeout=args.timeout) as machine:
        MotionSequencer(machine, config).run(paths)


def main(argv: list[str] | None = None) -> int:
    """Main entry point; returns the process exit status."""
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
    """Entry point for the fisnar-dxf command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
