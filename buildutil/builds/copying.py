"""Deep copies of builds through a scheme collaborator."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel

from buildutil.api.schema import Build


class BuildTypeMismatchError(TypeError):
    """Raised when a copy collaborator returns something other than a Build."""

    def __init__(self, obj: object, code: str = "build_type_mismatch") -> None:
        super().__init__(f"expected Build, got {obj!r}")
        self.obj = obj
        self.code = code


class Scheme(Protocol):
    """Structural copy capability."""

    def deep_copy(self, obj: Any) -> Any:
        """Return an independent copy of obj."""
        ...


class ModelScheme:
    """Scheme copying pydantic models field by field."""

    def deep_copy(self, obj: Any) -> Any:
        """Return a deep copy of a pydantic model.

        Raises:
            TypeError: If obj is not a pydantic model.
        """
        if not isinstance(obj, BaseModel):
            raise TypeError(f"cannot copy {type(obj).__name__}: not a model")
        return obj.model_copy(deep=True)


DEFAULT_SCHEME = ModelScheme()


def build_deep_copy(build: Build, scheme: Scheme | None = None) -> Build:
    """Return an independent deep copy of a build.

    Args:
        build: Build to copy.
        scheme: Copy collaborator; defaults to DEFAULT_SCHEME.

    Returns:
        Copied Build.

    Raises:
        BuildTypeMismatchError: If the scheme returns a non-Build object.
        Exception: Any error raised by the scheme, unchanged.
    """
    if scheme is None:
        scheme = DEFAULT_SCHEME
    copied = scheme.deep_copy(build)
    if not isinstance(copied, Build):
        raise BuildTypeMismatchError(copied)
    return copied


__all__ = [
    "DEFAULT_SCHEME",
    "BuildTypeMismatchError",
    "ModelScheme",
    "Scheme",
    "build_deep_copy",
]
