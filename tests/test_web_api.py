"""Tests for the web API."""

import pytest

try:
    from fastapi.testclient import TestClient
    from scope_graph.web import create_app
    HAS_WEB = True
except ImportError:
    HAS_WEB = False

pytestmark = pytest.mark.skipif(not HAS_WEB, reason="web dependencies not installed")


@pytest.fixture
def client():
    return TestClient(create_app())


def _load(client, scope_dir):
    res = client.post("/api/graph", json={"path": str(scope_dir)})
    assert res.status_code == 200
    return res.json()


class TestGraphAPI:
    def test_load_malformed_version_entry(self, client, tmp_path):
        (tmp_path / "a.json").write_text('{"name": "a", "versions": {"1.0.0": "abc"}}')
        res = client.post("/api/graph", json={"path": str(tmp_path)})
        assert res.status_code == 400

    def test_load(self, client, scope_dir):
        data = _load(client, scope_dir)
        assert data["nodes"] == 7  # 3 components + 4 loaded versions
        assert data["edges"] == 3

    def test_load_missing_dir(self, client, tmp_path):
        res = client.post("/api/graph", json={"path": str(tmp_path / "nope")})
        assert res.status_code == 404

    def test_summary_and_delete(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.get(f"/api/graph/{graph_id}")
        assert res.status_code == 200
        assert res.json()["components"] == 3

        assert client.delete(f"/api/graph/{graph_id}").status_code == 200
        assert client.get(f"/api/graph/{graph_id}").status_code == 404

    def test_unknown_graph(self, client):
        assert client.get("/api/graph/nonexistent").status_code == 404


class TestQueryAPI:
    def test_component(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.get(f"/api/graph/{graph_id}/component/scope/b")
        assert res.status_code == 200
        data = res.json()
        assert data["versions"] == ["1.0.0", "1.1.0"]
        assert len(data["loaded"]) == 1

    def test_component_latest(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.get(f"/api/graph/{graph_id}/component/scope/a@latest")
        assert res.status_code == 200
        assert res.json()["ref"] == "a200"
        assert res.json()["id"] == "scope/a"

    def test_component_not_found(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.get(f"/api/graph/{graph_id}/component/scope/zzz")
        assert res.status_code == 404

    def test_dependents(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.post(
            f"/api/graph/{graph_id}/dependents", json={"ids": ["scope/a@latest"]},
        )
        assert res.status_code == 200
        assert res.json()["dependents"] == {"scope/a": ["scope/c@0.1.0"]}

    def test_dependents_bad_id(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.post(f"/api/graph/{graph_id}/dependents", json={"ids": [""]})
        assert res.status_code == 400

    def test_check_remove(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.post(
            f"/api/graph/{graph_id}/check-remove", json={"ids": ["scope/a@1.0.0"]},
        )
        assert res.status_code == 200
        assert res.json() == {"safe": True, "removable": ["scope/a@1.0.0"], "blocked": {}}

    def test_check_remove_bare_id(self, client, scope_dir):
        graph_id = _load(client, scope_dir)["graph_id"]
        res = client.post(f"/api/graph/{graph_id}/check-remove", json={"ids": ["scope/b"]})
        assert res.status_code == 200
        assert res.json()["safe"] is False
        assert res.json()["blocked"] == {"scope/b": ["scope/a@2.0.0", "scope/c@0.1.0"]}
