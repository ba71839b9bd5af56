"""Build phase classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildutil.types import BuildPhase

if TYPE_CHECKING:
    from buildutil.api.schema import Build

# Phases in which a build may still change; every other phase is terminal
ACTIVE_PHASES = frozenset(
    {BuildPhase.NEW.value, BuildPhase.PENDING.value, BuildPhase.RUNNING.value}
)


def is_phase_complete(phase: str) -> bool:
    """Return whether a phase is terminal.

    Phases this package does not know about are terminal.
    """
    return phase not in ACTIVE_PHASES


def is_build_complete(build: Build) -> bool:
    """Return whether the provided build is complete or not."""
    return is_phase_complete(build.status.phase)


__all__ = ["ACTIVE_PHASES", "is_build_complete", "is_phase_complete"]
