"""Read queries over a built dependency graph."""

from __future__ import annotations

from collections import deque

from scope_graph.models import VERSION_DELIMITER, Component, ComponentId, ComponentVersion
from scope_graph.analysis.graph_models import DependencyGraph, TransitiveDependents


def get_component(graph: DependencyGraph, component_id: ComponentId) -> Component | None:
    return graph.components.get(component_id.to_string_without_version())


def get_component_version(
    graph: DependencyGraph, component_id: ComponentId,
) -> ComponentVersion | None:
    """Return the loaded version, resolving the latest sentinel first."""
    if component_id.is_latest:
        return resolve_latest_version(graph, component_id)
    node = graph.versions.get(component_id.to_string())
    return node.value if node else None


def get_component_versions(
    graph: DependencyGraph, component_id: ComponentId,
) -> list[ComponentVersion] | None:
    """All loaded versions of a component, in declaration order.

    Returns ``None`` when the component is unknown. Declared versions that
    failed to load are left out.
    """
    component = get_component(graph, component_id)
    if component is None:
        return None
    resolved = (
        get_component_version(graph, component_id.change_version(label))
        for label in component.versions
    )
    return [v for v in resolved if v]


def resolve_latest_version(
    graph: DependencyGraph, component_id: ComponentId,
) -> ComponentVersion | None:
    component = get_component(graph, component_id)
    if component is None:
        return None
    latest = component.latest_version()
    if latest is None:
        return None
    node = graph.versions.get(
        f"{component_id.to_string_without_version()}{VERSION_DELIMITER}{latest}"
    )
    return node.value if node else None


def find_dependents(
    graph: DependencyGraph, component_ids: list[ComponentId],
) -> dict[str, list[str]]:
    """Map each queried id to the version keys that directly require it.

    A latest-sentinel id is a component-level query: predecessors of every
    loaded version are collected under the id without version. Ids nobody
    requires get no entry. Lists are unordered.
    """
    dependents: dict[str, list[str]] = {}
    for component_id in component_ids:
        if component_id.is_latest:
            key = component_id.to_string_without_version()
            for child in graph.children.get(key, []):
                required_by = graph.predecessors(child)
                if required_by:
                    dependents[key] = dependents.get(key, []) + required_by
        else:
            key = component_id.to_string()
            required_by = graph.predecessors(key)
            if required_by:
                dependents[key] = dependents.get(key, []) + required_by
    return dependents


def find_transitive_dependents(
    graph: DependencyGraph, component_id: ComponentId,
) -> TransitiveDependents:
    """BFS over reverse edges collecting everything that needs ``component_id``."""
    if component_id.is_latest:
        root_id = component_id.to_string_without_version()
        roots = list(graph.children.get(root_id, []))
    else:
        root_id = component_id.to_string()
        roots = [root_id]

    result = TransitiveDependents(root_id=root_id)
    for root in roots:
        result.direct.update(graph.reverse.get(root, []))

    visited: set[str] = set(roots)
    queue = deque(roots)
    while queue:
        current = queue.popleft()
        for source in graph.reverse.get(current, []):
            if source in visited:
                continue
            visited.add(source)
            result.all_transitive.add(source)
            queue.append(source)

    result.all_transitive.difference_update(roots)
    return result
