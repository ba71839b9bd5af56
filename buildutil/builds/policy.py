"""Run policy resolution.

The run policy of a build is recorded as a label when the build is
created. Builds created before the label existed, or carrying a value
this package does not recognize, are scheduled serially.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from buildutil.api.constants import BUILD_RUN_POLICY_LABEL
from buildutil.types import RunPolicy

if TYPE_CHECKING:
    from buildutil.api.schema import Build

logger = logging.getLogger(__name__)

DEFAULT_RUN_POLICY = RunPolicy.SERIAL

_RUN_POLICIES: dict[str, RunPolicy] = {policy.value: policy for policy in RunPolicy}


def resolve_run_policy(
    labels: Mapping[str, str] | None,
    subject: str = "build",
) -> RunPolicy:
    """Return the run policy recorded in a label map.

    Args:
        labels: Object labels (None is treated as empty).
        subject: Description of the labelled object, used in log messages.

    Returns:
        The matching RunPolicy, or Serial when the label is missing or
        holds an unknown value.
    """
    value = (labels or {}).get(BUILD_RUN_POLICY_LABEL)
    policy = _RUN_POLICIES.get(value) if value is not None else None
    if policy is not None:
        return policy

    logger.debug(
        "%s does not have start policy label set, using default (%s)",
        subject,
        DEFAULT_RUN_POLICY.value,
    )
    return DEFAULT_RUN_POLICY


def build_run_policy(build: Build) -> RunPolicy:
    """Return the scheduling policy for the build."""
    return resolve_run_policy(
        build.metadata.labels,
        subject=f"Build {build.metadata.namespace}/{build.metadata.name}",
    )


__all__ = ["DEFAULT_RUN_POLICY", "build_run_policy", "resolve_run_policy"]
