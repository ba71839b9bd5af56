"""Small metadata readers for pods and build configs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildutil.api.constants import BUILD_ANNOTATION, BUILD_CONFIG_PAUSED_ANNOTATION

if TYPE_CHECKING:
    from buildutil.api.schema import BuildConfig, Pod


def get_build_name(pod: Pod | None) -> str:
    """Return the name of the build a pod executes."""
    if pod is None:
        return ""
    return pod.metadata.annotations.get(BUILD_ANNOTATION, "")


def is_paused(build_config: BuildConfig) -> bool:
    """Return whether a build config is paused.

    A paused build config cannot be used to create new builds.
    """
    value = build_config.metadata.annotations.get(BUILD_CONFIG_PAUSED_ANNOTATION, "")
    return value.lower() == "true"


__all__ = ["get_build_name", "is_paused"]
