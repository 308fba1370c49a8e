"""
Unit tests for MotionSequencer command ordering and dispenser handling.
"""

import logging

import pytest
from fisnar.sequencer import MotionSequencer, SequencerConfig, dispensing
from fisnar.utils.errors import ProtocolError
from fisnar.utils.geometry import Point3

from tests.utils import RecordingMachine

P = Point3


def run(paths, **config):
    machine = RecordingMachine()
    sleeps: list[float] = []
    MotionSequencer(machine, SequencerConfig(**config), sleep=sleeps.append).run(paths)
    return machine, sleeps


@pytest.mark.unit
class TestSequence:
    def test_dry_traversal_without_hop(self):
        machine, sleeps = run([(P(0, 0, 5), P(10, 0, 5))], speed_mm_s=12.5)
        assert machine.calls == [
            ("home",),
            ("set_speed", 12.5),
            ("move_to", 0.0, 0.0, 5.0),
            ("move_to", 0.0, 0.0, 5.0),
            ("move_to", 10.0, 0.0, 5.0),
            ("wait_for",),
            ("wait_for",),
        ]
        assert sleeps == []

    def test_dispensed_traversal_with_hop(self):
        machine, _ = run([(P(0, 0, 5), P(10, 0, 5))], dispense=True, z_hop_mm=2.0)
        assert machine.calls == [
            ("home",),
            ("set_speed", 10.0),
            ("move_to", 0.0, 0.0, 3.0),
            ("wait_for",),
            ("move_to", 0.0, 0.0, 5.0),
            ("set_dispenser", True),
            ("line_to", 0.0, 0.0, 5.0),
            ("line_to", 10.0, 0.0, 5.0),
            ("wait_for",),
            ("set_dispenser", False),
            ("move_to", 10.0, 0.0, 3.0),
            ("wait_for",),
        ]

    def test_dot_dwells_without_motion(self):
        machine, sleeps = run([(P(1, 2, 3),)], dispense=True, dot_time_ms=250)
        assert machine.names() == [
            "home",
            "set_speed",
            "move_to",
            "set_dispenser",
            "set_dispenser",
            "wait_for",
        ]
        assert sleeps == [0.25]

    def test_paths_run_in_order(self):
        paths = [(P(0, 0, 0), P(1, 0, 0)), (P(5, 5, 0),), (P(9, 9, 0), P(8, 8, 0))]
        machine, sleeps = run(paths, dispense=True)
        line_targets = [c[1:] for c in machine.calls if c[0] == "line_to"]
        assert line_targets == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (9.0, 9.0, 0.0), (8.0, 8.0, 0.0)]
        assert sleeps == [0.1]
        assert machine.names().count("set_dispenser") == 6
        assert machine.names()[-1] == "wait_for"

    def test_no_paths_still_homes_and_waits(self):
        machine, _ = run([])
        assert machine.names() == ["home", "set_speed", "wait_for"]

    def test_empty_path_rejected(self):
        seq = MotionSequencer(RecordingMachine())
        with pytest.raises(ValueError):
            seq.run_path(())


@pytest.mark.unit
class TestAbort:
    def test_failure_mid_path_turns_dispenser_off(self):
        machine = RecordingMachine(fail_on="line_to", fail_after=2)
        seq = MotionSequencer(machine, SequencerConfig(dispense=True), sleep=lambda s: None)
        paths = [(P(0, 0, 0), P(1, 0, 0), P(2, 0, 0)), (P(5, 5, 0), P(6, 6, 0))]

        with pytest.raises(ProtocolError):
            seq.run(paths)

        assert machine.calls[-1] == ("set_dispenser", False)
        assert machine.names().count("line_to") == 2
        # Second path never started
        assert ("move_to", 5.0, 5.0, 0.0) not in machine.calls

    def test_failure_in_setup_aborts(self):
        machine = RecordingMachine(fail_on="home")
        with pytest.raises(ProtocolError):
            MotionSequencer(machine).run([(P(0, 0, 0), P(1, 0, 0))])
        assert machine.names() == ["home"]

    def test_failed_switch_on_still_switches_off(self):
        class EnableFails(RecordingMachine):
            def set_dispenser(self, enabled):
                super().set_dispenser(enabled)
                if enabled:
                    raise ProtocolError("no ack for dispenser on", reply="E7")

        machine = EnableFails()
        with pytest.raises(ProtocolError) as exc:
            MotionSequencer(machine, SequencerConfig(dispense=True)).run([(P(0, 0, 0), P(1, 0, 0))])

        assert exc.value.reply == "E7"
        assert machine.calls[-2:] == [("set_dispenser", True), ("set_dispenser", False)]
        assert "line_to" not in machine.names()

    def test_failed_switch_off_after_abort_keeps_original_error(self, caplog):
        class FlakyMachine(RecordingMachine):
            def set_dispenser(self, enabled):
                super().set_dispenser(enabled)
                if not enabled:
                    raise ProtocolError("dispenser stuck", reply="E9")

        machine = FlakyMachine(fail_on="line_to")
        with caplog.at_level(logging.ERROR, logger="fisnar.sequencer"):
            with pytest.raises(ProtocolError) as exc:
                MotionSequencer(machine, SequencerConfig(dispense=True)).run([(P(0, 0, 0), P(1, 0, 0))])

        assert exc.value.reply == "E1"
        assert "Failed to switch dispenser off" in caplog.text


@pytest.mark.unit
class TestDispensingContext:
    def test_disabled_does_nothing(self):
        machine = RecordingMachine()
        with dispensing(machine, enabled=False):
            pass
        assert machine.calls == []

    def test_brackets_block(self):
        machine = RecordingMachine()
        with dispensing(machine):
            machine.line_to(1, 2, 3)
        assert machine.calls == [("set_dispenser", True), ("line_to", 1, 2, 3), ("set_dispenser", False)]

    def test_releases_on_exception(self):
        machine = RecordingMachine()
        with pytest.raises(KeyError):
            with dispensing(machine):
                raise KeyError("boom")
        assert machine.calls == [("set_dispenser", True), ("set_dispenser", False)]

    def test_releases_when_switch_on_fails(self):
        machine = RecordingMachine(fail_on="set_dispenser")
        with pytest.raises(ProtocolError):
            with dispensing(machine):
                machine.line_to(1, 2, 3)
        assert machine.calls == [("set_dispenser", True), ("set_dispenser", False)]
