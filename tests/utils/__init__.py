"""
Test utilities package.

Provides in-memory fakes for testing the driver and sequencer without hardware.
"""

from .fakes import RecordingMachine, ScriptedStream

__all__ = [
    "RecordingMachine",
    "ScriptedStream",
]
