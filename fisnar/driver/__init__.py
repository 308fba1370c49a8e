"""
Device drivers.

F4200N: request/acknowledge command driver for the Fisnar F4200N robot.
"""

from .f4200n import F4200N

__all__ = ["F4200N"]
