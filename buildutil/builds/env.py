"""Trusted environment merging for privileged build containers.

Build definitions are user supplied, but some of their environment
variables are passed into a privileged build container. Only names on the
trusted whitelist may cross that boundary; everything else is dropped here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Set

from buildutil.api.schema import EnvVar
from buildutil.config import get_trusted_env_whitelist

logger = logging.getLogger(__name__)


def filter_trusted_env(
    source: Iterable[EnvVar],
    whitelist: Set[str],
) -> list[EnvVar]:
    """Return the whitelisted entries of an environment list.

    When a name repeats, only its last entry is kept, at the position of
    that last entry. Order among the kept entries follows the source.

    Args:
        source: Untrusted environment list.
        whitelist: Names permitted to pass.

    Returns:
        New list with at most one entry per whitelisted name.
    """
    filtered: list[EnvVar | None] = []
    positions: dict[str, int] = {}
    for env in source:
        if env.name not in whitelist:
            logger.debug("Dropping untrusted environment variable %s", env.name)
            continue
        if env.name in positions:
            filtered[positions[env.name]] = None
        positions[env.name] = len(filtered)
        filtered.append(env)
    return [env for env in filtered if env is not None]


def merge_trusted_env_without_duplicates(
    source: Iterable[EnvVar],
    output: list[EnvVar],
    source_precedence: bool,
    whitelist: Set[str] | None = None,
) -> None:
    """Merge whitelisted source variables into an output list.

    The source list is filtered such that only whitelisted environment
    variables are merged into the output list. A source variable whose name
    already appears in the output is not appended again; if
    source_precedence is true its value replaces the output value in place.
    Remaining source variables are appended in source order.

    The output list is modified in place. The caller must hold the only
    reference to it for the duration of the call.

    Args:
        source: Untrusted environment list, e.g. from a build definition.
        output: Trusted environment list to update.
        source_precedence: Whether source values override output values.
        whitelist: Permitted names; defaults to the process whitelist.
    """
    if whitelist is None:
        whitelist = get_trusted_env_whitelist()

    filtered_source = filter_trusted_env(source, whitelist)
    by_name = {env.name: index for index, env in enumerate(filtered_source)}
    consumed = [False] * len(filtered_source)

    for i, env in enumerate(output):
        index = by_name.get(env.name)
        if index is None:
            continue
        if source_precedence:
            output[i] = env.model_copy(update={"value": filtered_source[index].value})
        consumed[index] = True

    output.extend(
        env.model_copy()
        for index, env in enumerate(filtered_source)
        if not consumed[index]
    )


__all__ = ["filter_trusted_env", "merge_trusted_env_without_duplicates"]
