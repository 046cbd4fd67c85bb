"""In-memory repository, handy for tests and for embedding."""

from __future__ import annotations

from scope_graph.models import Component, ComponentId, ComponentVersion
from scope_graph.repository.base import BaseRepository


class InMemoryRepository(BaseRepository):
    """Keeps components and version objects in plain dicts."""

    def __init__(self):
        self._components: dict[str, Component] = {}
        self._versions: dict[str, ComponentVersion] = {}

    def add_component(self, component: Component) -> None:
        self._components[component.id.to_string_without_version()] = component

    def add_version(
        self,
        component_id: ComponentId,
        version: str,
        data: ComponentVersion | None,
    ) -> None:
        """Declare ``version`` on the component; ``data=None`` leaves it unloadable."""
        key = component_id.to_string_without_version()
        component = self._components.get(key)
        if component is None:
            component = Component(id=component_id.change_version(None))
            self._components[key] = component
        component.versions[version] = data.ref if data else ""
        if data is not None:
            self._versions[component_id.change_version(version).to_string()] = data

    async def list_components(self, use_cache: bool = True) -> list[Component]:
        return list(self._components.values())

    async def load_version(
        self, component: Component, version: str,
    ) -> ComponentVersion | None:
        return self._versions.get(component.id.change_version(version).to_string())
