"""FastAPI routes for loading and querying scope graphs."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from scope_graph.models import ComponentId, ComponentVersion
from scope_graph.repository import JsonRepository
from scope_graph.analysis.dependency_graph import DependencyGraphBuilder
from scope_graph.analysis.queries import (
    find_dependents,
    find_transitive_dependents,
    get_component,
    get_component_version,
    get_component_versions,
)
from scope_graph.analysis.removal import check_removable
from scope_graph.web.state import GraphSession, GraphStore

router = APIRouter(prefix="/api")


# --- Request / Response models ---

class LoadRequest(BaseModel):
    path: str

class DependentsRequest(BaseModel):
    ids: list[str]
    transitive: bool = False

class RemoveRequest(BaseModel):
    ids: list[str]


def _store(request: Request) -> GraphStore:
    return request.app.state.graphs


def _session(request: Request, graph_id: str) -> GraphSession:
    session = _store(request).get(graph_id)
    if not session:
        raise HTTPException(404, "Graph not found")
    return session


def _parse_ids(raw_ids: list[str]) -> list[ComponentId]:
    try:
        return [ComponentId.parse(raw) for raw in raw_ids]
    except ValueError as e:
        raise HTTPException(400, str(e))


def _version_payload(version: ComponentVersion) -> dict:
    return {
        "id": str(version.id) if version.id else None,
        "ref": version.ref,
        "flattened_dependencies": [str(d) for d in version.flattened_dependencies],
    }


@router.post("/graph")
async def load(req: LoadRequest, request: Request):
    path = Path(req.path).expanduser().resolve()
    try:
        repo = JsonRepository(path)
        graph = await DependencyGraphBuilder().build(repo)
    except FileNotFoundError as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))

    session = GraphSession(graph=graph, source_dir=str(path))
    _store(request).add(session)
    return {
        "graph_id": session.id,
        "nodes": graph.node_count(),
        "edges": len(graph.edges),
    }


@router.get("/graph/{graph_id}")
async def summary(graph_id: str, request: Request):
    session = _session(request, graph_id)
    return {
        "graph_id": session.id,
        "source_dir": session.source_dir,
        "components": len(session.graph.components),
        "nodes": session.graph.node_count(),
        "edges": len(session.graph.edges),
    }


@router.delete("/graph/{graph_id}")
async def delete(graph_id: str, request: Request):
    if not _store(request).delete(graph_id):
        raise HTTPException(404, "Graph not found")
    return {"deleted": graph_id}


@router.get("/graph/{graph_id}/component/{component_id:path}")
async def component(graph_id: str, component_id: str, request: Request):
    graph = _session(request, graph_id).graph
    (cid,) = _parse_ids([component_id])

    if cid.version is None:
        found = get_component(graph, cid)
        if found is None:
            raise HTTPException(404, f"Component not found: {cid}")
        versions = get_component_versions(graph, cid) or []
        return {
            "id": cid.to_string_without_version(),
            "versions": list(found.versions),
            "loaded": [_version_payload(v) for v in versions],
        }

    version = get_component_version(graph, cid)
    if version is None:
        raise HTTPException(404, f"Version not found: {cid}")
    return _version_payload(version)


@router.post("/graph/{graph_id}/dependents")
async def dependents(graph_id: str, req: DependentsRequest, request: Request):
    graph = _session(request, graph_id).graph
    ids = _parse_ids(req.ids)

    if not req.transitive:
        found = find_dependents(graph, ids)
        return {"dependents": {k: sorted(set(v)) for k, v in found.items()}}

    result = {}
    for cid in ids:
        found = find_transitive_dependents(graph, cid)
        if found.all_transitive:
            result[found.root_id] = sorted(found.all_transitive)
    return {"dependents": result}


@router.post("/graph/{graph_id}/check-remove")
async def check_remove(graph_id: str, req: RemoveRequest, request: Request):
    graph = _session(request, graph_id).graph
    report = check_removable(graph, _parse_ids(req.ids))
    return {
        "safe": report.is_safe,
        "removable": report.removable,
        "blocked": report.blocked,
    }
