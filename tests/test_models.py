"""Tests for component ids and version helpers."""

import pytest

from scope_graph.models import LATEST_VERSION, Component, ComponentId
from scope_graph.versioning import max_satisfying


class TestComponentId:
    def test_parse_full(self):
        cid = ComponentId.parse("scope/a@1.0.0")
        assert cid.scope == "scope"
        assert cid.name == "a"
        assert cid.version == "1.0.0"

    def test_parse_without_version(self):
        cid = ComponentId.parse("scope/a")
        assert cid.version is None
        assert cid.to_string() == "scope/a"

    def test_parse_without_scope(self):
        cid = ComponentId.parse("a@2.0.0")
        assert cid.scope is None
        assert cid.to_string_without_version() == "a"
        assert str(cid) == "a@2.0.0"

    def test_parse_nested_name(self):
        cid = ComponentId.parse("scope/ui/button@1.0.0")
        assert cid.scope == "scope"
        assert cid.name == "ui/button"
        assert cid.to_string() == "scope/ui/button@1.0.0"

    def test_explicit_version_wins(self):
        cid = ComponentId.parse("scope/a@1.0.0", version="2.0.0")
        assert cid.version == "2.0.0"

    def test_latest(self):
        cid = ComponentId.parse(f"scope/a@{LATEST_VERSION}")
        assert cid.is_latest
        assert not cid.change_version("1.0.0").is_latest

    def test_missing_version_means_latest(self):
        assert ComponentId.parse("scope/a").is_latest

    @pytest.mark.parametrize("text", ["", "   ", "scope//a", "/a"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            ComponentId.parse(text)

    def test_hashable(self):
        assert {ComponentId.parse("s/a@1.0.0"), ComponentId.parse("s/a@1.0.0")} == {
            ComponentId(name="a", scope="s", version="1.0.0")
        }


class TestVersioning:
    def test_max_satisfying(self):
        assert max_satisfying(["1.0.0", "10.0.0", "2.0.0"]) == "10.0.0"

    def test_ignores_invalid_labels(self):
        assert max_satisfying(["banana", "0.0.1", "1.2"]) == "0.0.1"

    def test_nothing_valid(self):
        assert max_satisfying(["banana"]) is None
        assert max_satisfying([]) is None

    def test_prerelease_not_matched_by_wildcard(self):
        assert max_satisfying(["1.0.0", "2.0.0-beta.1"]) == "1.0.0"

    def test_leading_v_prefix(self):
        assert max_satisfying(["1.0.0", "v1.2.0", "=1.1.0"]) == "v1.2.0"

    def test_range(self):
        assert max_satisfying(["1.0.0", "1.4.2", "2.0.0"], "^1.0.0") == "1.4.2"

    def test_component_latest_version(self):
        component = Component(
            id=ComponentId.parse("s/a"),
            versions={"0.9.0": "", "0.10.0": ""},
        )
        assert component.latest_version() == "0.10.0"
