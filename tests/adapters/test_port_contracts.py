"""Adapter contract tests for the default ports implementation.

Purpose
-------
Verify the built-in adapters continue to satisfy the application-layer ports
defined in ``src/lib_layered_env/application/ports.py`` so dependency
inversion remains enforceable through automated tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lib_layered_env.adapters.dotenv.default import DefaultDotEnvLoader, read_text_file
from lib_layered_env.adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader
from lib_layered_env.adapters.schemas.pydantic_schema import PydanticSchema
from lib_layered_env.adapters.sources import from_files, from_json, from_object, from_process_env, from_toml
from lib_layered_env.application import ports
from lib_layered_env.application.merge import merge_layers


def test_default_dotenv_loader_contract(tmp_path: Path) -> None:
    """DefaultDotEnvLoader must fulfil DotEnvLoader and return LoadedEnvFile records."""

    (tmp_path / ".env").write_text("SERVICE_TIMEOUT=15\n", encoding="utf-8")
    loader = DefaultDotEnvLoader(tmp_path, mode="production")
    assert isinstance(loader, ports.DotEnvLoader)

    loaded = loader.load()
    assert loaded[0].contents == "SERVICE_TIMEOUT=15\n"


def test_read_text_file_contract() -> None:
    assert isinstance(read_text_file, ports.FileReader)


@pytest.mark.parametrize("loader_cls", [TOMLFileLoader, JSONFileLoader])
def test_structured_loader_contract(tmp_path: Path, loader_cls: type) -> None:
    """Each structured loader should satisfy FileLoader and decode its target format."""

    loader = loader_cls()
    assert isinstance(loader, ports.FileLoader)

    if isinstance(loader, TOMLFileLoader):
        path = tmp_path / "env.toml"
        path.write_text("VALUE = 1\n", encoding="utf-8")
    else:
        path = tmp_path / "env.json"
        path.write_text('{"VALUE": 1}', encoding="utf-8")

    assert loader.load(str(path)) == {"VALUE": "1"}


def test_builtin_sources_satisfy_source_adapter(tmp_path: Path) -> None:
    sources = [
        from_object({}),
        from_process_env({}),
        from_files(tmp_path),
        from_json(tmp_path / "env.json"),
        from_toml(tmp_path / "env.toml"),
    ]
    for source in sources:
        assert isinstance(source, ports.SourceAdapter)
    assert [source.name for source in sources] == ["object", "process-env", "files", "json", "toml"]


def test_pydantic_schema_satisfies_schema_port() -> None:
    assert isinstance(PydanticSchema(int), ports.Schema)


def test_merge_layers_satisfies_merger() -> None:
    assert isinstance(merge_layers, ports.Merger)
