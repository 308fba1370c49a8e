"""
Motion sequencing: run stitched paths on a device session.

For each path the nozzle optionally hops in Z, approaches the first point,
dispenses a dot or traverses the path, and hops away again. Any device error
aborts the whole run; the dispenser is always switched off on the way out.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from fisnar.config import DOT_TIME_MS_DEFAULT, SPEED_MM_S_DEFAULT, TRACE, Z_HOP_MM_DEFAULT
from fisnar.paths.extractor import Path
from fisnar.protocol.types import Machine

logger = logging.getLogger(__name__)


@dataclass
class SequencerConfig:
    """Job parameters for a dispensing run."""

    speed_mm_s: float = SPEED_MM_S_DEFAULT
    dot_time_ms: int = DOT_TIME_MS_DEFAULT
    dispense: bool = False
    z_hop_mm: float = Z_HOP_MM_DEFAULT


@contextmanager
def dispensing(machine: Machine, enabled: bool = True) -> Iterator[None]:
    """
    Hold the dispenser on for the duration of the block.

    The dispenser is switched off even if the block raises, or if the switch-on
    command itself fails (the device may have acted on it before the reply
    went wrong). If switching it off fails after such an error, that failure
    is logged and the original error propagates.
    """
    if not enabled:
        yield
        return

    try:
        machine.set_dispenser(True)
        yield
    except BaseException:
        try:
            machine.set_dispenser(False)
        except Exception:
            logger.exception("Failed to switch dispenser off after aborted path")
        raise
    machine.set_dispenser(False)


class MotionSequencer:
    """Issues the device commands for a list of paths."""

    def __init__(
        self,
        machine: Machine,
        config: SequencerConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.machine = machine
        self.config = config or SequencerConfig()
        self._sleep = sleep

    def setup(self) -> None:
        self.machine.home()
        self.machine.set_speed(self.config.speed_mm_s)

    def run(self, paths: Sequence[Path]) -> None:
        """Home, set speed, run every path, then wait for the device to go idle."""
        self.setup()
        for index, path in enumerate(paths):
            self.run_path(path, index)
        self.machine.wait_for()
        logger.info(f"Completed {len(paths)} path(s)")

    def run_path(self, path: Path, index: int = 0) -> None:
        if len(path) == 0:
            raise ValueError(f"Path {index} has no points")

        cfg = self.config
        first, last = path[0], path[-1]
        logger.info(f"Path {index}: {len(path)} point(s) from {first}")

        if cfg.z_hop_mm:
            self.machine.move_to(first.x, first.y, first.z - cfg.z_hop_mm)
            self.machine.wait_for()
        self.machine.move_to(first.x, first.y, first.z)

        with dispensing(self.machine, cfg.dispense):
            if len(path) == 1:
                logger.info(f"Path {index}: dot, {cfg.dot_time_ms} ms")
                self._sleep(cfg.dot_time_ms / 1000.0)
            else:
                traverse = self.machine.line_to if cfg.dispense else self.machine.move_to
                for point in path:
                    logger.log(TRACE, "  .. %s", point)
                    traverse(point.x, point.y, point.z)
                self.machine.wait_for()

        if cfg.z_hop_mm:
            self.machine.move_to(last.x, last.y, last.z - cfg.z_hop_mm)
