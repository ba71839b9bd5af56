"""Selecting and filtering the builds of a build config.

This module handles:
- Label selectors for the current and deprecated config labels
- The lister interface used to enumerate builds
- Filtering a config's build history with a caller-supplied predicate
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from buildutil.api.constants import (
    BUILD_CONFIG_LABEL,
    BUILD_CONFIG_LABEL_DEPRECATED,
    label_value,
)
from buildutil.api.schema import Build, BuildList

BuildFilter = Callable[[Build], bool]


@dataclass(frozen=True)
class LabelSelector:
    """Exact-match predicate over label key/value pairs.

    An empty selector matches every label set.

    Attributes:
        requirements: Sorted (key, value) pairs that must all be present.
    """

    requirements: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_set(cls, labels: Mapping[str, str]) -> LabelSelector:
        """Create a selector requiring every pair in a label map."""
        return cls(tuple(sorted(labels.items())))

    def matches(self, labels: Mapping[str, str] | None) -> bool:
        """Return whether a label map satisfies every requirement."""
        labels = labels or {}
        return all(
            key in labels and labels[key] == value
            for key, value in self.requirements
        )

    def is_empty(self) -> bool:
        """Return whether the selector has no requirements."""
        return not self.requirements

    def __str__(self) -> str:
        return ",".join(f"{key}={value}" for key, value in self.requirements)


class BuildLister(Protocol):
    """Read access to stored builds."""

    def list(self, namespace: str, selector: LabelSelector) -> BuildList:
        """Return the builds in a namespace matching a selector."""
        ...


def build_config_selector(name: str) -> LabelSelector:
    """Return a selector matching all builds of a build config."""
    return LabelSelector.from_set({BUILD_CONFIG_LABEL: label_value(name)})


def build_config_selector_deprecated(name: str) -> LabelSelector:
    """Return a selector matching builds of a config by the deprecated label."""
    return LabelSelector.from_set({BUILD_CONFIG_LABEL_DEPRECATED: name})


def build_config_builds(
    lister: BuildLister,
    namespace: str,
    name: str,
    filter_func: BuildFilter | None = None,
) -> BuildList:
    """Return the builds of a build config.

    Optionally a filter function selects only builds that match the
    caller's criteria. The lister's result is never modified; a filtered
    result is a new list carrying the lister's type and list metadata.

    Args:
        lister: Source of stored builds.
        namespace: Namespace of the build config.
        name: Build config name.
        filter_func: Predicate called once per build, in order.

    Returns:
        BuildList of the config's builds.

    Raises:
        Exception: Any error raised by the lister, unchanged.
    """
    result = lister.list(namespace, build_config_selector(name))
    if filter_func is None:
        return result

    return BuildList(
        kind=result.kind,
        api_version=result.api_version,
        metadata=result.metadata.model_copy(),
        items=[build for build in result.items if filter_func(build)],
    )


__all__ = [
    "BuildFilter",
    "BuildLister",
    "LabelSelector",
    "build_config_builds",
    "build_config_selector",
    "build_config_selector_deprecated",
]
