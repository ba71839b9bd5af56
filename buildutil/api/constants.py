"""Metadata keys and naming rules shared with the orchestration platform.

The annotation and label keys below are part of the wire contract with
the platform and must stay byte-for-byte identical.
"""

# Annotation on a build naming the config that produced it
BUILD_CONFIG_ANNOTATION = "openshift.io/build-config.name"

# Label on a build naming the config that produced it
BUILD_CONFIG_LABEL = "openshift.io/build-config.name"

# Label used for the same purpose by older platform releases
BUILD_CONFIG_LABEL_DEPRECATED = "buildconfig"

# Annotation holding the ordinal number of a build within its config
BUILD_NUMBER_ANNOTATION = "openshift.io/build.number"

# Label holding the run policy a build was created under
BUILD_RUN_POLICY_LABEL = "openshift.io/build.start-policy"

# Annotation on a build config that blocks new builds when "true"
BUILD_CONFIG_PAUSED_ANNOTATION = "openshift.io/build-config.paused"

# Annotation on a build pod naming the build it executes
BUILD_ANNOTATION = "openshift.io/build.name"

# Label values are DNS-1123 labels
LABEL_VALUE_MAX_LENGTH = 63

DEFAULT_TRUSTED_ENV_NAMES: tuple[str, ...] = ("BUILD_LOGLEVEL", "GIT_SSL_NO_VERIFY")


def label_value(name: str) -> str:
    """Return a name shortened to fit in a label value.

    Args:
        name: Object name, possibly longer than a label value allows.

    Returns:
        The name, truncated to LABEL_VALUE_MAX_LENGTH characters.
    """
    if len(name) <= LABEL_VALUE_MAX_LENGTH:
        return name
    return name[:LABEL_VALUE_MAX_LENGTH]


__all__ = [
    "BUILD_ANNOTATION",
    "BUILD_CONFIG_ANNOTATION",
    "BUILD_CONFIG_LABEL",
    "BUILD_CONFIG_LABEL_DEPRECATED",
    "BUILD_CONFIG_PAUSED_ANNOTATION",
    "BUILD_NUMBER_ANNOTATION",
    "BUILD_RUN_POLICY_LABEL",
    "DEFAULT_TRUSTED_ENV_NAMES",
    "LABEL_VALUE_MAX_LENGTH",
    "label_value",
]
