"""Data models for the scope dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from scope_graph.models import Component, ComponentVersion

REQUIRE_EDGE = "require"


@dataclass
class VersionNode:
    key: str  # "<component>@<version>"
    value: ComponentVersion
    parent: str  # owning component key


@dataclass
class DependencyEdge:
    source_id: str
    target_id: str
    edge_type: str = REQUIRE_EDGE


@dataclass
class DependencyGraph:
    components: dict[str, Component] = field(default_factory=dict)
    versions: dict[str, VersionNode] = field(default_factory=dict)
    children: dict[str, list[str]] = field(default_factory=dict)  # component -> [version keys]
    edges: list[DependencyEdge] = field(default_factory=list)
    forward: dict[str, list[str]] = field(default_factory=dict)  # source -> [targets]
    reverse: dict[str, list[str]] = field(default_factory=dict)  # target -> [sources]

    def node_count(self) -> int:
        return len(self.components) + len(self.versions)

    def predecessors(self, key: str) -> list[str]:
        return list(self.reverse.get(key, []))

    def successors(self, key: str) -> list[str]:
        return list(self.forward.get(key, []))


@dataclass
class TransitiveDependents:
    root_id: str
    direct: set[str] = field(default_factory=set)
    all_transitive: set[str] = field(default_factory=set)


@dataclass
class RemovalReport:
    removable: list[str] = field(default_factory=list)
    blocked: dict[str, list[str]] = field(default_factory=dict)  # id -> dependents

    @property
    def is_safe(self) -> bool:
        return not self.blocked
