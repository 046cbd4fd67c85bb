"""Abstract base repository adapter."""

from __future__ import annotations

import abc

from scope_graph.models import Component, ComponentVersion


class BaseRepository(abc.ABC):
    """Storage of a scope's components and their versions."""

    @abc.abstractmethod
    async def list_components(self, use_cache: bool = True) -> list[Component]:
        """Return every component in the scope.

        ``use_cache=False`` requests a direct listing that bypasses any
        component cache the adapter keeps.
        """

    @abc.abstractmethod
    async def load_version(
        self, component: Component, version: str,
    ) -> ComponentVersion | None:
        """Materialize one declared version, or ``None`` when it has no data."""
