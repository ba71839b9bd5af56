"""Input image resolution for build strategies."""

from __future__ import annotations

from buildutil.api.schema import (
    BuildStrategy,
    CustomBuildStrategy,
    DockerBuildStrategy,
    ObjectReference,
    SourceBuildStrategy,
)


def get_input_reference(strategy: BuildStrategy | None) -> ObjectReference | None:
    """Return the image reference a strategy builds from.

    The returned object is the strategy's own ``from_`` field, not a copy,
    so changes made through it are visible on the strategy.

    Args:
        strategy: Active build strategy variant, or None.

    Returns:
        The strategy's input reference, or None if there is no strategy or
        a Docker strategy without a base image override.
    """
    if isinstance(strategy, SourceBuildStrategy):
        return strategy.from_
    if isinstance(strategy, DockerBuildStrategy):
        return strategy.from_
    if isinstance(strategy, CustomBuildStrategy):
        return strategy.from_
    return None


__all__ = ["get_input_reference"]
