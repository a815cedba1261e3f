"""Core data models for depchange."""

import base64
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def _dig(mapping: Mapping | None, *keys: str) -> Any:
    value: Any = mapping
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Requirement:
    """A manifest constraint on a dependency."""

    file: str
    requirement: str | None = None
    groups: tuple[str, ...] = ()
    source: Mapping[str, Any] | None = None
    metadata: Mapping[str, Any] | None = None

    @property
    def property_name(self) -> str | None:
        return _dig(self.metadata, "property_name")

    @property
    def dependency_set(self) -> Mapping[str, Any] | None:
        return _dig(self.metadata, "dependency_set")

    @property
    def source_ref(self) -> str | None:
        return _dig(self.source, "ref")

    @property
    def source_digest(self) -> str | None:
        return _dig(self.source, "digest")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Requirement":
        return cls(
            file=_require_str(data, "file"),
            requirement=data.get("requirement"),
            groups=tuple(data.get("groups") or ()),
            source=data.get("source"),
            metadata=data.get("metadata"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "requirement": self.requirement,
            "groups": list(self.groups),
            "source": dict(self.source) if self.source is not None else None,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }


@dataclass(frozen=True)
class Dependency:
    """A single package being updated."""

    name: str
    package_manager: str
    version: str | None = None
    previous_version: str | None = None
    requirements: tuple[Requirement, ...] = ()
    previous_requirements: tuple[Requirement, ...] | None = None
    removed: bool = False

    def appears_in_lockfile(self) -> bool:
        return bool(
            self.previous_version
            or (self.version and self.previous_requirements is None)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dependency":
        previous = data.get("previous_requirements")
        return cls(
            name=_require_str(data, "name"),
            package_manager=_require_str(data, "package_manager"),
            version=data.get("version"),
            previous_version=data.get("previous_version"),
            requirements=tuple(Requirement.from_dict(r) for r in data.get("requirements") or ()),
            previous_requirements=(
                tuple(Requirement.from_dict(r) for r in previous) if previous is not None else None
            ),
            removed=bool(data.get("removed", False)),
        )


class FileOperation(str, Enum):
    """What a file writer should do with an updated file."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class DependencyFile:
    """A rewritten manifest or lockfile."""

    name: str
    content: str | bytes | None
    directory: str = "/"
    operation: FileOperation = FileOperation.UPDATE

    @property
    def path(self) -> str:
        return posixpath.normpath(posixpath.join("/", self.directory, self.name))

    def to_dict(self) -> dict[str, Any]:
        content = self.content
        encoding = "utf-8"
        if isinstance(content, bytes):
            content = base64.b64encode(content).decode("ascii")
            encoding = "base64"

        return {
            "name": self.name,
            "directory": self.directory,
            "path": self.path,
            "content": content,
            "operation": FileOperation(self.operation).value,
            "content_encoding": encoding,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DependencyFile":
        content = data.get("content")
        if content is not None and data.get("content_encoding") == "base64":
            content = base64.b64decode(content)
        return cls(
            name=_require_str(data, "name"),
            content=content,
            directory=data.get("directory") or "/",
            operation=FileOperation(data.get("operation") or FileOperation.UPDATE.value),
        )


@dataclass(frozen=True)
class Source:
    """Repository the update job runs against."""

    provider: str
    repo: str
    directory: str = "/"
    branch: str | None = None


@dataclass(frozen=True)
class Job:
    """Context of the update job that produced a change."""

    source: Source
    credentials: tuple[Mapping[str, Any], ...] = ()
    commit_message_options: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class GroupRule:
    """Rule that batched several dependencies into one update."""

    name: str
    patterns: tuple[str, ...] = field(default_factory=tuple)
