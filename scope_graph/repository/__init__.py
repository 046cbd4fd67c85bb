"""Repository adapters feeding the dependency graph."""

from scope_graph.repository.base import BaseRepository
from scope_graph.repository.json_repository import JsonRepository
from scope_graph.repository.memory_repository import InMemoryRepository

__all__ = ["BaseRepository", "InMemoryRepository", "JsonRepository"]
