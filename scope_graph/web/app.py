"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from scope_graph import __version__
from scope_graph.web.api import router
from scope_graph.web.state import GraphStore


def create_app() -> FastAPI:
    app = FastAPI(title="scope-graph", version=__version__)
    app.state.graphs = GraphStore()
    app.include_router(router)
    return app
