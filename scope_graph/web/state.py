"""In-memory store of loaded graphs for the web API."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from scope_graph.analysis.graph_models import DependencyGraph


@dataclass
class GraphSession:
    graph: DependencyGraph
    source_dir: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class GraphStore:
    """Loaded graphs keyed by session id. Each graph is read-only once stored."""

    def __init__(self):
        self._sessions: dict[str, GraphSession] = {}

    def add(self, session: GraphSession) -> None:
        self._sessions[session.id] = session

    def get(self, graph_id: str) -> GraphSession | None:
        return self._sessions.get(graph_id)

    def delete(self, graph_id: str) -> bool:
        return self._sessions.pop(graph_id, None) is not None
