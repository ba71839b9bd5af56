"""Build decision helpers.

This module handles:
- Phase classification and run policy resolution
- Build naming, config ownership and versioning
- Input image resolution
- Listing and filtering a config's builds
- Trusted environment merging
- Pod and build config metadata accessors
- Deep copies through a scheme collaborator
"""

from buildutil.builds.accessors import get_build_name, is_paused
from buildutil.builds.copying import BuildTypeMismatchError, build_deep_copy
from buildutil.builds.env import merge_trusted_env_without_duplicates
from buildutil.builds.naming import (
    BuildNumberNotFoundError,
    build_name_for_config_version,
    build_number,
    config_name_for_build,
    version_for_build,
)
from buildutil.builds.phase import is_build_complete, is_phase_complete
from buildutil.builds.policy import build_run_policy, resolve_run_policy
from buildutil.builds.query import (
    LabelSelector,
    build_config_builds,
    build_config_selector,
    build_config_selector_deprecated,
)
from buildutil.builds.strategy import get_input_reference

__all__ = [
    "BuildNumberNotFoundError",
    "BuildTypeMismatchError",
    "LabelSelector",
    "build_config_builds",
    "build_config_selector",
    "build_config_selector_deprecated",
    "build_deep_copy",
    "build_name_for_config_version",
    "build_number",
    "build_run_policy",
    "config_name_for_build",
    "get_build_name",
    "get_input_reference",
    "is_build_complete",
    "is_paused",
    "is_phase_complete",
    "merge_trusted_env_without_duplicates",
    "resolve_run_policy",
    "version_for_build",
]
