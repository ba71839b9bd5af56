"""Shared fixtures for buildutil tests."""

from collections.abc import Callable, Iterator

import pytest

from buildutil.api.schema import (
    Build,
    BuildList,
    BuildSpec,
    BuildStatus,
    BuildStrategy,
    ListMeta,
    ObjectMeta,
)
from buildutil.builds.query import LabelSelector
from buildutil.config import get_trusted_env_whitelist


@pytest.fixture(autouse=True)
def reset_trusted_env_whitelist() -> Iterator[None]:
    """Recompute the process whitelist for every test."""
    get_trusted_env_whitelist.cache_clear()
    yield
    get_trusted_env_whitelist.cache_clear()


@pytest.fixture
def make_build() -> Callable[..., Build]:
    """Return a factory for builds with the given metadata and phase."""

    def _make(
        name: str = "app-1",
        namespace: str = "ci",
        phase: str = "New",
        labels: dict[str, str] | None = None,
        annotations: dict[str, str] | None = None,
        strategy: BuildStrategy | None = None,
    ) -> Build:
        return Build(
            metadata=ObjectMeta(
                name=name,
                namespace=namespace,
                labels=labels or {},
                annotations=annotations or {},
            ),
            spec=BuildSpec(strategy=strategy),
            status=BuildStatus(phase=phase),
        )

    return _make


class RecordingLister:
    """In-memory lister that records every call it receives."""

    def __init__(self, result: BuildList) -> None:
        self.result = result
        self.calls: list[tuple[str, LabelSelector]] = []

    def list(self, namespace: str, selector: LabelSelector) -> BuildList:
        self.calls.append((namespace, selector))
        return self.result


@pytest.fixture
def build_list(make_build) -> BuildList:
    """Create a build list with mixed phases and pagination metadata."""
    labels = {"openshift.io/build-config.name": "app"}
    return BuildList(
        metadata=ListMeta(resource_version="4711", continue_token="page-2"),
        items=[
            make_build(name="app-1", phase="Complete", labels=labels),
            make_build(name="app-2", phase="Failed", labels=labels),
            make_build(name="app-3", phase="Running", labels=labels),
            make_build(name="app-4", phase="New", labels=labels),
        ],
    )


@pytest.fixture
def lister(build_list: BuildList) -> RecordingLister:
    """Create a lister returning the shared build list."""
    return RecordingLister(build_list)
