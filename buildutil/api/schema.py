"""Pydantic models for the build object model.

This module defines the subset of the orchestration platform's object
model that buildutil reads: builds, build lists, build configs, pods and
environment variables. Models accept the platform's camelCase JSON keys
as well as snake_case field names.
"""

from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel, to_snake

from buildutil.types import BuildPhase


class _APIModel(BaseModel):
    """Base model for platform objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ObjectMeta(_APIModel):
    """Metadata carried by every persisted object.

    Attributes:
        name: Object name, unique within its namespace.
        namespace: Namespace the object lives in.
        labels: Label map used by selectors.
        annotations: Free-form annotation map.
        resource_version: Opaque version assigned by the store.
        uid: Unique identifier assigned by the store.
    """

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    resource_version: str | None = None
    uid: str | None = None


class ListMeta(_APIModel):
    """Metadata carried by list responses.

    Attributes:
        resource_version: Version of the collection at list time.
        continue_token: Pagination token for the next page.
        self_link: Link back to the listed collection.
    """

    resource_version: str | None = None
    continue_token: str | None = Field(default=None, alias="continue")
    self_link: str | None = None


class ObjectReference(_APIModel):
    """Reference to another object, typically an image."""

    kind: str = ""
    name: str = ""
    namespace: str | None = None


class EnvVar(_APIModel):
    """Environment variable passed to a build container."""

    name: str
    value: str = ""


class _StrategyVariant(_APIModel):
    """Base for build strategy variants.

    The platform nests a variant's fields under a per-type key next to
    ``type``, e.g. ``{"type": "Source", "sourceStrategy": {"from": ...}}``.
    Documents that put the fields inline beside ``type`` are also accepted.
    """

    wrapper_key: ClassVar[str]

    @model_validator(mode="before")
    @classmethod
    def unwrap_variant(cls, data: Any) -> Any:
        """Lift the nested variant fields up beside ``type``."""
        if not isinstance(data, dict):
            return data
        for key in (cls.wrapper_key, to_snake(cls.wrapper_key)):
            if key not in data:
                continue
            nested = data[key] or {}
            if not isinstance(nested, dict):
                raise ValueError(f"{key} must be a mapping")
            unwrapped = dict(nested)
            if "type" in data:
                unwrapped["type"] = data["type"]
            return unwrapped
        return data

    @model_serializer(mode="wrap")
    def wrap_variant(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        """Nest the variant fields under their per-type key."""
        fields = handler(self)
        strategy_type = fields.pop("type", self.type)
        key = self.wrapper_key if info.by_alias else to_snake(self.wrapper_key)
        return {"type": strategy_type, key: fields}


class SourceBuildStrategy(_StrategyVariant):
    """Source-to-image strategy; always names a builder image."""

    wrapper_key: ClassVar[str] = "sourceStrategy"

    type: Literal["Source"] = "Source"
    from_: ObjectReference = Field(alias="from")
    env: list[EnvVar] = Field(default_factory=list)


class DockerBuildStrategy(_StrategyVariant):
    """Dockerfile strategy; the base image override is optional."""

    wrapper_key: ClassVar[str] = "dockerStrategy"

    type: Literal["Docker"] = "Docker"
    from_: ObjectReference | None = Field(default=None, alias="from")
    env: list[EnvVar] = Field(default_factory=list)


class CustomBuildStrategy(_StrategyVariant):
    """Custom builder strategy; always names a builder image."""

    wrapper_key: ClassVar[str] = "customStrategy"

    type: Literal["Custom"] = "Custom"
    from_: ObjectReference = Field(alias="from")
    env: list[EnvVar] = Field(default_factory=list)


# Exactly one variant is active; "type" selects it
BuildStrategy = Annotated[
    Union[SourceBuildStrategy, DockerBuildStrategy, CustomBuildStrategy],
    Field(discriminator="type"),
]


class BuildSpec(_APIModel):
    """Desired state of a build."""

    strategy: Optional[BuildStrategy] = None


class BuildStatus(_APIModel):
    """Observed state of a build.

    Attributes:
        phase: Lifecycle phase. Kept as a string so phases unknown to this
            package are preserved.
        message: Human-readable detail for the phase.
    """

    phase: str = BuildPhase.NEW.value
    message: str | None = None


class Build(_APIModel):
    """A single execution attempt of a build config."""

    kind: str = "Build"
    api_version: str = "v1"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: BuildSpec = Field(default_factory=BuildSpec)
    status: BuildStatus = Field(default_factory=BuildStatus)


class BuildList(_APIModel):
    """Ordered collection of builds returned by a lister."""

    kind: str = "BuildList"
    api_version: str = "v1"
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: list[Build] = Field(default_factory=list)


class BuildConfig(_APIModel):
    """Template that produces builds. Only metadata is modelled."""

    kind: str = "BuildConfig"
    api_version: str = "v1"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)


class Pod(_APIModel):
    """Workload unit executing a build. Only metadata is modelled."""

    kind: str = "Pod"
    api_version: str = "v1"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)


__all__ = [
    "Build",
    "BuildConfig",
    "BuildList",
    "BuildSpec",
    "BuildStatus",
    "BuildStrategy",
    "CustomBuildStrategy",
    "DockerBuildStrategy",
    "EnvVar",
    "ListMeta",
    "ObjectMeta",
    "ObjectReference",
    "Pod",
    "SourceBuildStrategy",
]
