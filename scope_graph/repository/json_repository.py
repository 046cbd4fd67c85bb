"""Repository backed by a directory of component JSON files.

Each ``*.json`` file directly under the scope directory describes one
component::

    {
      "scope": "acme",
      "name": "button",
      "versions": {
        "1.0.0": {"ref": "3f2a...", "flattened_dependencies": ["acme/theme@2.1.0"]},
        "1.1.0": null
      }
    }

A ``null`` version entry is declared but has no materialized data.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from scope_graph.models import Component, ComponentId, ComponentVersion
from scope_graph.repository.base import BaseRepository

logger = logging.getLogger(__name__)


class JsonRepository(BaseRepository):
    def __init__(self, path: Path | str):
        self.path = Path(path)
        if not self.path.is_dir():
            raise FileNotFoundError(f"Scope directory not found: {self.path}")
        self._cache: list[Component] | None = None
        self._raw: dict[str, dict[str, Any]] = {}

    async def list_components(self, use_cache: bool = True) -> list[Component]:
        if use_cache and self._cache is not None:
            return list(self._cache)

        components: list[Component] = []
        raw: dict[str, dict[str, Any]] = {}
        for file_path in sorted(self.path.glob("*.json")):
            data = await asyncio.to_thread(self._read_file, file_path)
            component = self._parse_component(data, file_path)
            key = component.id.to_string_without_version()
            raw[key] = data.get("versions") or {}
            components.append(component)

        logger.debug("Listed %d component(s) from %s", len(components), self.path)
        self._raw = raw
        self._cache = components
        return list(components)

    async def load_version(
        self, component: Component, version: str,
    ) -> ComponentVersion | None:
        versions = self._raw.get(component.id.to_string_without_version(), {})
        entry = versions.get(version)
        if entry is None:
            return None
        return ComponentVersion(
            ref=entry.get("ref", ""),
            dependencies=[ComponentId.parse(d) for d in entry.get("dependencies", [])],
            flattened_dependencies=[
                ComponentId.parse(d) for d in entry.get("flattened_dependencies", [])
            ],
        )

    @staticmethod
    def _read_file(file_path: Path) -> dict[str, Any]:
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed component file {file_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Malformed component file {file_path}: expected an object")
        return data

    @staticmethod
    def _parse_component(data: dict[str, Any], file_path: Path) -> Component:
        name = data.get("name")
        if not name:
            raise ValueError(f"Malformed component file {file_path}: missing name")
        component_id = ComponentId(name=name, scope=data.get("scope"))
        raw_versions = data.get("versions") or {}
        if not isinstance(raw_versions, dict):
            raise ValueError(f"Malformed component file {file_path}: versions must be an object")

        versions: dict[str, str] = {}
        for label, entry in raw_versions.items():
            if entry is not None and not isinstance(entry, dict):
                raise ValueError(
                    f"Malformed component file {file_path}: version {label!r} must be an object or null"
                )
            versions[label] = (entry or {}).get("ref", "")
        return Component(id=component_id, versions=versions)
