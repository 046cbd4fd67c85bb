"""Graph construction and queries."""

from scope_graph.analysis.dependency_graph import DependencyGraphBuilder, load_graph
from scope_graph.analysis.graph_models import DependencyGraph
from scope_graph.analysis.queries import (
    find_dependents,
    find_transitive_dependents,
    get_component,
    get_component_version,
    get_component_versions,
    resolve_latest_version,
)
from scope_graph.analysis.removal import check_removable

__all__ = [
    "DependencyGraph",
    "DependencyGraphBuilder",
    "check_removable",
    "find_dependents",
    "find_transitive_dependents",
    "get_component",
    "get_component_version",
    "get_component_versions",
    "load_graph",
    "resolve_latest_version",
]
