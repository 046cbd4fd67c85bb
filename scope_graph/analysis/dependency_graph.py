"""Dependency graph builder: loads every component version of a scope and links requirements."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field

from scope_graph.models import (
    VERSION_DELIMITER,
    Component,
    ComponentId,
    ComponentVersion,
    GraphConfig,
)
from scope_graph.repository.base import BaseRepository
from scope_graph.analysis.graph_models import (
    REQUIRE_EDGE,
    DependencyEdge,
    DependencyGraph,
    VersionNode,
)

logger = logging.getLogger(__name__)


@dataclass
class _ComponentLoad:
    """What one component task produced, merged after the barrier."""
    component: Component
    versions: list[tuple[str, ComponentVersion]] = field(default_factory=list)


class DependencyGraphBuilder:
    """Build a dependency graph from a scope repository."""

    def __init__(self, config: GraphConfig | None = None):
        self.config = config or GraphConfig()

    async def build(self, repo: BaseRepository) -> DependencyGraph:
        graph = DependencyGraph()

        # Step 1: Direct listing, bypassing the component cache by default
        components = await repo.list_components(self.config.use_cache)
        logger.debug("Building graph over %d component(s)", len(components))

        # Step 2: Fan out version loads; any failure aborts the whole build
        limiter = (
            asyncio.Semaphore(self.config.max_concurrency)
            if self.config.max_concurrency
            else None
        )
        try:
            loads = await asyncio.gather(
                *(self._load_component(c, repo, limiter) for c in components)
            )
        except Exception:
            logger.error("Graph construction failed while loading versions")
            raise

        # Step 3: Register nodes
        for load in loads:
            component_key = load.component.id.to_string_without_version()
            graph.components[component_key] = load.component
            graph.children.setdefault(component_key, [])
            for version_key, version in load.versions:
                graph.versions[version_key] = VersionNode(
                    key=version_key, value=version, parent=component_key,
                )
                graph.children[component_key].append(version_key)

        # Step 4: Require edges from flattened dependencies
        for version_key, node in graph.versions.items():
            for dep in node.value.flattened_dependencies:
                self._add_edge(graph, version_key, dep.to_string())

        logger.info(
            "Dependency graph built: %d component(s), %d version(s), %d edge(s)",
            len(graph.components), len(graph.versions), len(graph.edges),
        )
        return graph

    def build_sync(self, repo: BaseRepository) -> DependencyGraph:
        return asyncio.run(self.build(repo))

    async def _load_component(
        self,
        component: Component,
        repo: BaseRepository,
        limiter: asyncio.Semaphore | None,
    ) -> _ComponentLoad:
        component_key = component.id.to_string_without_version()
        labels = list(component.versions)

        async def fetch(label: str) -> ComponentVersion | None:
            async with limiter if limiter else contextlib.nullcontext():
                return await component.load_version(label, repo)

        results = await asyncio.gather(*(fetch(label) for label in labels))

        load = _ComponentLoad(component=component)
        for label, version in zip(labels, results):
            if not version:
                logger.debug("Skipping %s%s%s: no version data", component_key, VERSION_DELIMITER, label)
                continue
            version.id = ComponentId.parse(component_key)
            load.versions.append((f"{component_key}{VERSION_DELIMITER}{label}", version))
        return load

    def _add_edge(self, graph: DependencyGraph, source_id: str, target_id: str) -> None:
        # Avoid duplicate edges
        if target_id in graph.forward.get(source_id, []):
            return
        graph.edges.append(DependencyEdge(source_id=source_id, target_id=target_id, edge_type=REQUIRE_EDGE))
        graph.forward.setdefault(source_id, []).append(target_id)
        graph.reverse.setdefault(target_id, []).append(source_id)


async def load_graph(repo: BaseRepository, config: GraphConfig | None = None) -> DependencyGraph:
    """Build a fresh graph for ``repo``."""
    return await DependencyGraphBuilder(config).build(repo)
