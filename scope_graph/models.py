"""Data models for the scope dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from scope_graph.versioning import max_satisfying

if TYPE_CHECKING:
    from scope_graph.repository.base import BaseRepository

LATEST_VERSION = "latest"
VERSION_DELIMITER = "@"
SCOPE_DELIMITER = "/"


@dataclass(frozen=True)
class ComponentId:
    """Scope, name and optional version of a component."""
    name: str
    scope: str | None = None
    version: str | None = None

    @classmethod
    def parse(cls, text: str, version: str | None = None) -> ComponentId:
        """Parse ``scope/name@version`` (scope and version are optional).

        An explicit ``version`` argument wins over one embedded in ``text``.
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("Empty component id")

        # Split on the last delimiter, a leading one belongs to the name
        head, sep, tail = text.rpartition(VERSION_DELIMITER)
        if sep and head:
            text, embedded = head, tail or None
        else:
            embedded = None

        segments = text.split(SCOPE_DELIMITER)
        if any(not s for s in segments):
            raise ValueError(f"Invalid component id: {text!r}")
        if len(segments) >= 2:
            scope, name = segments[0], SCOPE_DELIMITER.join(segments[1:])
        else:
            scope, name = None, segments[0]

        return cls(name=name, scope=scope, version=version or embedded)

    @property
    def is_latest(self) -> bool:
        # A missing version means the latest one
        return self.version is None or self.version == LATEST_VERSION

    def change_version(self, version: str | None) -> ComponentId:
        return replace(self, version=version)

    def to_string_without_version(self) -> str:
        if self.scope:
            return f"{self.scope}{SCOPE_DELIMITER}{self.name}"
        return self.name

    def to_string(self) -> str:
        base = self.to_string_without_version()
        if self.version:
            return f"{base}{VERSION_DELIMITER}{self.version}"
        return base

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class ComponentVersion:
    """One loaded snapshot of a component."""
    flattened_dependencies: list[ComponentId] = field(default_factory=list)
    dependencies: list[ComponentId] = field(default_factory=list)
    ref: str = ""
    id: ComponentId | None = None  # owning component, stamped on graph load


@dataclass
class Component:
    """A named entity owning its declared versions (label -> ref)."""
    id: ComponentId
    versions: dict[str, str] = field(default_factory=dict)

    async def load_version(
        self, version: str, repository: BaseRepository,
    ) -> ComponentVersion | None:
        return await repository.load_version(self, version)

    def latest_version(self) -> str | None:
        return max_satisfying(list(self.versions), "*")


@dataclass
class GraphConfig:
    """Configuration for building a dependency graph."""
    use_cache: bool = False
    max_concurrency: int | None = None  # None = unbounded fan-out
