"""Object model and wire constants shared with the orchestration platform."""

from buildutil.api.schema import (
    Build,
    BuildConfig,
    BuildList,
    EnvVar,
    ObjectMeta,
    ObjectReference,
    Pod,
)

__all__ = [
    "Build",
    "BuildConfig",
    "BuildList",
    "EnvVar",
    "ObjectMeta",
    "ObjectReference",
    "Pod",
]
