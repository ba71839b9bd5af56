"""Loading platform objects from YAML/JSON files.

This module provides helpers for reading builds, build lists, build
configs, pods and environment lists from files, and a read-only build
lister backed by a build list document.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, TypeAdapter

from buildutil.api.schema import Build, BuildConfig, BuildList, EnvVar, Pod
from buildutil.builds.query import LabelSelector

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_ENV_LIST_ADAPTER = TypeAdapter(list[EnvVar])


# Document parsers keyed by lowercased file extension
_PARSERS: dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def load_document(path: Path) -> dict[str, Any]:
    """Load a platform object document from a YAML or JSON file.

    The parser is chosen by file extension. An empty document loads as an
    empty mapping so that every field falls back to its default.

    Args:
        path: Path to a .yaml, .yml or .json file.

    Returns:
        Top-level mapping of the document.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If a YAML document is malformed.
        json.JSONDecodeError: If a JSON document is malformed.
        ValueError: If the extension is not supported, or the document
            is not a single object.
    """
    suffix = path.suffix.lower()
    parse = _PARSERS.get(suffix)
    if parse is None:
        raise ValueError(
            f"Unsupported file extension '{suffix}'. Use .yaml, .yml, or .json"
        )
    data = parse(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{path} does not hold an object document, got {type(data).__name__}"
        )
    return data


def _load_model(path: Path, model: type[ModelT]) -> ModelT:
    return model.model_validate(load_document(path))


def load_build(path: Path) -> Build:
    """Load and validate a build from a file.

    Raises:
        pydantic.ValidationError: If data does not match the schema.
    """
    return _load_model(path, Build)


def load_build_list(path: Path) -> BuildList:
    """Load and validate a build list from a file.

    Raises:
        pydantic.ValidationError: If data does not match the schema.
    """
    return _load_model(path, BuildList)


def load_build_config(path: Path) -> BuildConfig:
    """Load and validate a build config from a file."""
    return _load_model(path, BuildConfig)


def load_pod(path: Path) -> Pod:
    """Load and validate a pod from a file."""
    return _load_model(path, Pod)


def load_env_list(path: Path) -> list[EnvVar]:
    """Load an environment list from a file.

    The document is a mapping whose ``env`` key holds a list of
    ``{name, value}`` entries.

    Args:
        path: Path to the YAML/JSON file.

    Returns:
        Environment variables in file order.

    Raises:
        ValueError: If the document has no ``env`` key.
        pydantic.ValidationError: If entries do not match the schema.
    """
    data = load_document(path)
    if "env" not in data:
        raise ValueError(f"Expected an 'env' list in {path}")
    return _ENV_LIST_ADAPTER.validate_python(data["env"] or [])


def model_to_json_string(obj: BaseModel | list[BaseModel]) -> str:
    """Render one model or a list of models as platform JSON."""
    if isinstance(obj, list):
        data: Any = [
            item.model_dump(by_alias=True, exclude_none=True) for item in obj
        ]
    else:
        data = obj.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(data, indent=2, ensure_ascii=False)


class FileBuildLister:
    """Read-only build lister backed by a build list document.

    The document is re-read on every call so edits to the file are seen
    by later calls. An empty namespace lists builds in all namespaces.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def list(self, namespace: str, selector: LabelSelector) -> BuildList:
        """Return the builds in a namespace matching a selector.

        Raises:
            FileNotFoundError: If the document does not exist.
            pydantic.ValidationError: If the document is not a build list.
        """
        document = load_build_list(self.path)
        items = [
            build
            for build in document.items
            if (not namespace or build.metadata.namespace == namespace)
            and selector.matches(build.metadata.labels)
        ]
        logger.debug(
            "Listed %d of %d builds from %s (namespace=%r, selector=%s)",
            len(items),
            len(document.items),
            self.path,
            namespace,
            selector,
        )
        return BuildList(
            kind=document.kind,
            api_version=document.api_version,
            metadata=document.metadata,
            items=items,
        )


__all__ = [
    "FileBuildLister",
    "load_build",
    "load_build_config",
    "load_build_list",
    "load_document",
    "load_env_list",
    "load_pod",
    "model_to_json_string",
]
