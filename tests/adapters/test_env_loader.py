"""Process environment adapter tests.

The scenarios cover snapshot isolation and the ambient mode lookup order.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_layered_env.adapters.env.default import DefaultEnvLoader, default_mode, process_env


def test_process_env_is_a_snapshot(monkeypatch: pytest.MonkeyPatch) -> None:
    """Later changes to the process must not leak into an earlier snapshot."""

    monkeypatch.setenv("LLE_SNAPSHOT", "before")
    snapshot = process_env()
    monkeypatch.setenv("LLE_SNAPSHOT", "after")
    assert snapshot["LLE_SNAPSHOT"] == "before"


def test_default_mode_prefers_app_env() -> None:
    assert default_mode({"APP_ENV": "staging", "NODE_ENV": "production"}) == "staging"


def test_default_mode_treats_empty_values_as_unset() -> None:
    assert default_mode({"APP_ENV": "", "NODE_ENV": "production"}) == "production"
    assert default_mode({"APP_ENV": None, "NODE_ENV": ""}) is None
    assert default_mode({}) is None


def test_default_mode_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.setenv("NODE_ENV", "development")
    assert default_mode() == "development"


def test_env_loader_returns_fresh_copies() -> None:
    """Mutating a returned snapshot never changes what the next call sees."""

    loader = DefaultEnvLoader(environ={"PORT": "3000"})
    first = loader.load()
    first["PORT"] = "changed"
    assert loader.load() == {"PORT": "3000"}


def test_env_loader_defaults_to_process(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLE_LOADER_VAR", "present")
    assert DefaultEnvLoader().load()["LLE_LOADER_VAR"] == "present"


@given(st.dictionaries(st.text(min_size=1, max_size=8), st.one_of(st.none(), st.text(max_size=8)), max_size=6))
def test_env_loader_mirrors_any_mapping(environ: dict[str, str | None]) -> None:
    assert DefaultEnvLoader(environ=environ).load() == environ
