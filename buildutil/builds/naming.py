"""Build naming and versioning.

This module handles:
- Composing build names from a config name and version
- Resolving the config that owns a build
- Reading the build number annotation, either leniently or strictly
"""

from __future__ import annotations

import re

from buildutil.api.constants import (
    BUILD_CONFIG_ANNOTATION,
    BUILD_CONFIG_LABEL,
    BUILD_CONFIG_LABEL_DEPRECATED,
    BUILD_NUMBER_ANNOTATION,
)
from buildutil.api.schema import Build

# Optional sign followed by ASCII digits only
_DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class BuildNumberNotFoundError(LookupError):
    """Raised when a build carries no build number annotation."""

    def __init__(
        self,
        namespace: str,
        name: str,
        code: str = "build_number_not_found",
    ) -> None:
        super().__init__(
            f"build {namespace}/{name} does not have "
            f"{BUILD_NUMBER_ANNOTATION} annotation"
        )
        self.namespace = namespace
        self.name = name
        self.code = code


def parse_int64(value: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Args:
        value: String to parse.

    Returns:
        Parsed integer.

    Raises:
        ValueError: If the value is not a decimal integer or does not fit
            in 64 bits.
    """
    if not _DECIMAL_PATTERN.fullmatch(value):
        raise ValueError(f"invalid syntax for integer: {value!r}")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"value out of range for int64: {value!r}")
    return number


def build_name_for_config_version(name: str, version: int) -> str:
    """Return the name of the version-th build of the named config."""
    return f"{name}-{version}"


def config_name_for_build(build: Build | None) -> str:
    """Return the name of the config that produced a build.

    The annotation wins over the current label, which wins over the
    deprecated label. A key that is present wins even with an empty value.

    Args:
        build: Build to inspect, or None.

    Returns:
        Config name, or an empty string if none is recorded.
    """
    if build is None:
        return ""
    annotations = build.metadata.annotations
    if BUILD_CONFIG_ANNOTATION in annotations:
        return annotations[BUILD_CONFIG_ANNOTATION]
    labels = build.metadata.labels
    if BUILD_CONFIG_LABEL in labels:
        return labels[BUILD_CONFIG_LABEL]
    return labels.get(BUILD_CONFIG_LABEL_DEPRECATED, "")


def version_for_build(build: Build | None) -> int:
    """Return the version of a build within its config.

    If no version can be found, 0 is returned to indicate no version.
    """
    if build is None:
        return 0
    try:
        return parse_int64(build.metadata.annotations.get(BUILD_NUMBER_ANNOTATION, ""))
    except ValueError:
        return 0


def build_number(build: Build) -> int:
    """Return the build number of a build.

    Args:
        build: Build to inspect.

    Returns:
        Build number parsed from the build number annotation.

    Raises:
        BuildNumberNotFoundError: If the annotation is absent.
        ValueError: If the annotation is not a valid 64-bit integer.
    """
    annotations = build.metadata.annotations
    if BUILD_NUMBER_ANNOTATION not in annotations:
        raise BuildNumberNotFoundError(build.metadata.namespace, build.metadata.name)
    return parse_int64(annotations[BUILD_NUMBER_ANNOTATION])


__all__ = [
    "BuildNumberNotFoundError",
    "build_name_for_config_version",
    "build_number",
    "config_name_for_build",
    "parse_int64",
    "version_for_build",
]
