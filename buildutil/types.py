"""Shared type definitions for buildutil.

This module contains enums shared across subpackages to avoid circular
imports.
"""

from enum import Enum


class BuildPhase(str, Enum):
    """Known lifecycle phases of a build.

    The orchestration platform may report phases not listed here; they are
    kept as plain strings on the object model.
    """

    NEW = "New"
    PENDING = "Pending"
    RUNNING = "Running"
    COMPLETE = "Complete"
    FAILED = "Failed"
    ERROR = "Error"
    CANCELLED = "Cancelled"


class RunPolicy(str, Enum):
    """Scheduling policy for builds of the same config."""

    PARALLEL = "Parallel"
    SERIAL = "Serial"
    SERIAL_LATEST_ONLY = "SerialLatestOnly"


__all__ = [
    "BuildPhase",
    "RunPolicy",
]
