"""Shared fixtures for building scopes in tests."""

from pathlib import Path

import pytest

from scope_graph.models import ComponentId, ComponentVersion
from scope_graph.repository import InMemoryRepository

FIXTURES = Path(__file__).parent / "fixtures"


def _make_repo(layout):
    """Build a repository from ``{"scope/a": {"1.0.0": ["scope/b@1.0.0"]}}``.

    A ``None`` dependency list declares the version without loadable data.
    """
    repo = InMemoryRepository()
    for component, versions in layout.items():
        cid = ComponentId.parse(component)
        for label, deps in versions.items():
            data = None
            if deps is not None:
                data = ComponentVersion(
                    ref=f"{component}:{label}",
                    flattened_dependencies=[ComponentId.parse(d) for d in deps],
                )
            repo.add_version(cid, label, data)
    return repo


@pytest.fixture
def make_repo():
    return _make_repo


@pytest.fixture
def scope_dir():
    return FIXTURES / "scope"
