from __future__ import annotations

import json
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_layered_env.adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, json_type_name, stringify
from lib_layered_env.domain.errors import InvalidFormat, NotFound, UnexpectedRootType


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "env.toml"
    path.write_text('PORT = 5432\nHOST = "db"\nDEBUG = false\nRATIO = 0.5\n', encoding="utf-8")
    data = TOMLFileLoader().load(str(path))
    assert data == {"PORT": "5432", "HOST": "db", "DEBUG": "false", "RATIO": "0.5"}


def test_toml_loader_renders_tables_as_json(tmp_path: Path) -> None:
    path = tmp_path / "env.toml"
    path.write_text('TAGS = ["a", "b"]\n[DB]\nport = 1\n', encoding="utf-8")
    data = TOMLFileLoader().load(str(path))
    assert json.loads(data["DB"] or "") == {"port": 1}
    assert data["TAGS"] == '["a","b"]'


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_toml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "env.toml"
    path.write_text("PORT = = 1", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        TOMLFileLoader().load(str(path))


def test_json_loader_flat_object(tmp_path: Path) -> None:
    path = tmp_path / "env.json"
    path.write_text('{"PORT": 3000, "DEBUG": true, "NAME": "api", "TOKEN": null}', encoding="utf-8")
    assert JSONFileLoader().load(str(path)) == {"PORT": "3000", "DEBUG": "true", "NAME": "api", "TOKEN": None}


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "env.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


@pytest.mark.parametrize(
    ("payload", "found"),
    [("[1, 2, 3]", "array"), ('"text"', "string"), ("42", "number"), ("true", "boolean"), ("null", "null")],
)
def test_json_loader_rejects_non_object_roots(tmp_path: Path, payload: str, found: str) -> None:
    path = tmp_path / "env.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(TypeError) as excinfo:
        JSONFileLoader().load(str(path))
    assert isinstance(excinfo.value, UnexpectedRootType)
    assert str(excinfo.value) == f'from_json: expected a flat object in "{path}", got {found}'


def test_json_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        JSONFileLoader().load(str(tmp_path / "missing.json"))


def test_json_type_name_object() -> None:
    assert json_type_name({}) == "object"


@given(st.text())
def test_stringify_keeps_strings(value: str) -> None:
    assert stringify(value) == value


@given(st.integers())
def test_stringify_integers_parse_back(value: int) -> None:
    assert int(stringify(value) or "") == value
