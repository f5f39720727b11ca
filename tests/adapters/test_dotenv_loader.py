from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_layered_env.adapters.dotenv.default import (
    DefaultDotEnvLoader,
    candidate_file_names,
    load_env,
    read_text_file,
    resolve_directory,
)


def _write_all(directory: Path, names: list[str]) -> None:
    for name in names:
        (directory / name).write_text(f"SOURCE={name}\n", encoding="utf-8")


def test_candidate_names_for_development() -> None:
    assert candidate_file_names("development") == [
        ".env.development.local",
        ".env.local",
        ".env.development",
        ".env",
    ]


@pytest.mark.parametrize("mode", ["test", "testing"])
def test_candidate_names_skip_local_in_test_modes(mode: str) -> None:
    assert ".env.local" not in candidate_file_names(mode)
    assert candidate_file_names(mode) == [f".env.{mode}.local", f".env.{mode}", ".env"]


@pytest.mark.parametrize("mode", [None, ""])
def test_candidate_names_without_mode(mode: str | None) -> None:
    assert candidate_file_names(mode) == [".env.local", ".env"]


@given(st.text(alphabet=st.characters(min_codepoint=97, max_codepoint=122), min_size=1, max_size=10))
def test_candidate_names_always_end_with_plain_env(mode: str) -> None:
    names = candidate_file_names(mode)
    assert names[-1] == ".env"
    assert names[0] == f".env.{mode}.local"
    assert (".env.local" in names) is (mode not in {"test", "testing"})


def test_loader_returns_existing_files_in_priority_order(tmp_path: Path) -> None:
    _write_all(tmp_path, [".env", ".env.development", ".env.local"])
    files = DefaultDotEnvLoader(tmp_path, mode="development").load()
    assert [Path(item.path).name for item in files] == [".env.local", ".env.development", ".env"]
    assert files[-1].contents == "SOURCE=.env\n"


def test_loader_in_test_mode_ignores_env_local(tmp_path: Path) -> None:
    _write_all(tmp_path, [".env", ".env.local", ".env.test"])
    files = DefaultDotEnvLoader(tmp_path, mode="test").load()
    assert [Path(item.path).name for item in files] == [".env.test", ".env"]


def test_loader_with_empty_directory_returns_nothing(tmp_path: Path) -> None:
    assert DefaultDotEnvLoader(tmp_path, mode="production").load() == []


def test_loader_with_missing_directory_returns_nothing(tmp_path: Path) -> None:
    assert DefaultDotEnvLoader(tmp_path / "absent").load() == []


def test_explicit_files_replace_priority_derivation(tmp_path: Path) -> None:
    _write_all(tmp_path, [".env", ".env.custom", "other.env"])
    loader = DefaultDotEnvLoader(tmp_path, mode="development", files=["nested/.env.custom", "other.env", "missing.env"])
    assert loader.file_names() == [".env.custom", "other.env", "missing.env"]
    assert [Path(item.path).name for item in loader.load()] == [".env.custom", "other.env"]


def test_mode_falls_back_to_ambient_environment(tmp_path: Path) -> None:
    loader = DefaultDotEnvLoader(tmp_path, environ={"APP_ENV": "", "NODE_ENV": "staging"})
    assert loader.file_names()[0] == ".env.staging.local"


def test_mode_uses_process_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.setenv("NODE_ENV", "test")
    assert DefaultDotEnvLoader(tmp_path).file_names() == [".env.test.local", ".env.test", ".env"]


def test_injected_reader_receives_every_candidate(tmp_path: Path) -> None:
    requested: list[str] = []

    def reader(path: str) -> str | None:
        requested.append(path)
        return "A=1" if path.endswith(".env") else None

    files = DefaultDotEnvLoader(tmp_path, mode="production", reader=reader).load()
    assert [Path(path).name for path in requested] == candidate_file_names("production")
    assert len(files) == 1
    assert files[0].contents == "A=1"


def test_unreadable_candidate_is_skipped(tmp_path: Path) -> None:
    def reader(path: str) -> str | None:
        if path.endswith(".env.local"):
            raise PermissionError(path)
        return "A=1"

    files = DefaultDotEnvLoader(tmp_path, reader=reader, environ={}).load()
    assert [Path(item.path).name for item in files] == [".env"]


def test_missing_files_are_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("DEBUG", logger="lib_layered_env")
    DefaultDotEnvLoader(tmp_path, environ={}).load()
    missing = [record for record in caplog.records if record.getMessage() == "dotenv_file_missing"]
    assert len(missing) == 2


def test_file_url_directory(tmp_path: Path) -> None:
    _write_all(tmp_path, [".env"])
    files = load_env(tmp_path.as_uri(), mode="production")
    assert [Path(item.path).name for item in files] == [".env"]
    assert resolve_directory(tmp_path.as_uri()) == tmp_path


def test_read_text_file_returns_none_for_directories(tmp_path: Path) -> None:
    assert read_text_file(str(tmp_path)) is None
