"""Tests for settings and the helpers driven by them."""

import pytest

from crossquery.exceptions import InvalidQueryDefinitionError
from crossquery.expressions import Parameter
from crossquery.settings import CrossQuerySettings, settings
from crossquery.utils import as_selector, field_to_path, path_to_field


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("QUERY_STRICT_TYPES", "QUERY_DEFAULT_BACKEND", "QUERY_PARAMETER_PREFIX"):
            monkeypatch.delenv(name, raising=False)
        fresh = CrossQuerySettings(_env_file=None)
        assert fresh.QUERY_STRICT_TYPES is True
        assert fresh.QUERY_DEFAULT_BACKEND == "generic"
        assert fresh.QUERY_PARAMETER_PREFIX == "p"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("QUERY_STRICT_TYPES", "false")
        monkeypatch.setenv("QUERY_DEFAULT_BACKEND", "sql")
        fresh = CrossQuerySettings(_env_file=None)
        assert fresh.QUERY_STRICT_TYPES is False
        assert fresh.QUERY_DEFAULT_BACKEND == "sql"

    def test_parameter_prefix(self, monkeypatch):
        monkeypatch.setattr(settings, "QUERY_PARAMETER_PREFIX", "arg")
        assert Parameter().name.startswith("arg")


class TestFieldPaths:
    @pytest.mark.parametrize("field", ["d.e", "d__e", "d..e"])
    def test_field_to_path(self, field):
        assert field_to_path(field) == ["d", "e"]

    def test_empty_path(self):
        with pytest.raises(InvalidQueryDefinitionError):
            field_to_path("__")

    def test_path_to_field(self):
        assert path_to_field(["d", "e"]) == "d.e"

    def test_invalid_selector(self):
        with pytest.raises(InvalidQueryDefinitionError):
            as_selector(42)
