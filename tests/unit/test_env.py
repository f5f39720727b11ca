"""Immutable ``Env`` snapshot behaviour."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_layered_env.domain.env import EMPTY_ENV, Env, SourceInfo


def _env() -> Env:
    meta: dict[str, SourceInfo] = {"PORT": {"source": "dotenv", "path": "/srv/.env", "key": "PORT"}}
    return Env({"PORT": 3000, "HOST": "localhost", "TOKEN": None}, meta)


def test_env_is_a_mapping() -> None:
    env = _env()
    assert isinstance(env, Mapping)
    assert env["PORT"] == 3000
    assert len(env) == 3
    assert list(env) == ["PORT", "HOST", "TOKEN"]
    assert "HOST" in env


def test_get_with_default() -> None:
    env = _env()
    assert env.get("HOST") == "localhost"
    assert env.get("UNKNOWN") is None
    assert env.get("UNKNOWN", "fallback") == "fallback"


def test_has_requires_a_value() -> None:
    env = _env()
    assert env.has("PORT")
    assert not env.has("TOKEN")
    assert not env.has("UNKNOWN")


def test_all_returns_independent_copy() -> None:
    env = _env()
    copy = env.all()
    copy["PORT"] = 1
    assert env["PORT"] == 3000


def test_env_cannot_be_mutated() -> None:
    env = _env()
    with pytest.raises(TypeError):
        env._values["PORT"] = 1  # type: ignore[index]
    with pytest.raises(AttributeError):
        env._values = {}  # type: ignore[misc]


def test_source_mapping_changes_do_not_leak() -> None:
    values = {"A": "1"}
    env = Env(values, {})
    values["A"] = "2"
    assert env["A"] == "1"


def test_origin() -> None:
    env = _env()
    assert env.origin("PORT") == {"source": "dotenv", "path": "/srv/.env", "key": "PORT"}
    assert env.origin("HOST") is None


def test_to_json_stringifies_unknown_types() -> None:
    env = Env({"DAY": date(2024, 1, 2), "N": 1}, {})
    assert json.loads(env.to_json()) == {"DAY": "2024-01-02", "N": 1}
    assert "\n" in env.to_json(indent=2)


def test_empty_env() -> None:
    assert len(EMPTY_ENV) == 0
    assert EMPTY_ENV.all() == {}


@given(st.dictionaries(st.text(max_size=5), st.one_of(st.none(), st.integers(), st.text(max_size=5)), max_size=6))
def test_env_mirrors_input(values: dict[str, object]) -> None:
    env = Env(values, {})
    assert env.all() == values
    assert all(env.has(key) is (value is not None) for key, value in values.items())
