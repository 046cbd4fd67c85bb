"""Removal impact check: may these component versions be deleted from the scope?"""

from __future__ import annotations

from scope_graph.models import ComponentId
from scope_graph.analysis.graph_models import DependencyGraph, RemovalReport
from scope_graph.analysis.queries import find_dependents


def check_removable(graph: DependencyGraph, component_ids: list[ComponentId]) -> RemovalReport:
    """Report which ids are still required by versions outside the removal set."""
    removing: set[str] = set()
    for component_id in component_ids:
        if component_id.is_latest:
            removing.update(
                graph.children.get(component_id.to_string_without_version(), [])
            )
        else:
            removing.add(component_id.to_string())

    dependents = find_dependents(graph, component_ids)
    report = RemovalReport()
    for component_id in component_ids:
        key = (
            component_id.to_string_without_version()
            if component_id.is_latest
            else component_id.to_string()
        )
        outside = sorted(set(dependents.get(key, [])) - removing)
        if outside:
            report.blocked[key] = outside
        elif key not in report.removable:
            report.removable.append(key)
    return report
