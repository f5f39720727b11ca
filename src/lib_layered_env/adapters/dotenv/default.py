"""`.env` file resolver.

Purpose
-------
Implement the :class:`lib_layered_env.application.ports.DotEnvLoader`
protocol: compute the candidate ``.env`` file names of one directory for a
given mode, read each through an injected reader, and return those that
exist, highest priority first.

Contents
--------
* :func:`candidate_file_names` – pure priority derivation from the mode.
* :func:`read_text_file` – default reader returning ``None`` for absent files.
* :class:`DefaultDotEnvLoader` – resolver bound to a directory and options.
* :func:`load_env` – functional shortcut around the resolver.

System Role
-----------
Feeds raw file contents to the parser. A missing or unreadable candidate is
never an error; it is logged and left out.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Sequence
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from ...application.ports import FileReader
from ...domain.env import LoadedEnvFile
from ...domain.errors import NotFound
from ...observability import log_debug, make_event
from ..env.default import default_mode

#: Modes in which ``.env.local`` is skipped so test runs stay reproducible.
TEST_MODES = frozenset({"test", "testing"})


def candidate_file_names(mode: str | None) -> list[str]:
    """Return ``.env`` file names for *mode*, highest priority first.

    Examples
    --------
    >>> candidate_file_names("development")
    ['.env.development.local', '.env.local', '.env.development', '.env']
    >>> candidate_file_names("test")
    ['.env.test.local', '.env.test', '.env']
    >>> candidate_file_names(None)
    ['.env.local', '.env']
    """

    names: list[str] = []
    if mode:
        names.append(f".env.{mode}.local")
    if mode not in TEST_MODES:
        names.append(".env.local")
    if mode:
        names.append(f".env.{mode}")
    names.append(".env")
    return names


def read_text_file(path: str) -> str | None:
    """Return the UTF-8 text of *path*, or ``None`` when it is not a readable file.

    Examples
    --------
    >>> read_text_file("/definitely/not/here/.env") is None
    True
    """

    file_path = Path(path)
    if not file_path.is_file():
        return None
    return file_path.read_text(encoding="utf-8")


def resolve_directory(directory: str | os.PathLike[str]) -> Path:
    """Normalise a path-like or ``file://`` URL string into a :class:`Path`.

    Examples
    --------
    >>> resolve_directory("file:///srv/app/").as_posix()
    '/srv/app'
    >>> resolve_directory("config").as_posix()
    'config'
    """

    if isinstance(directory, str) and directory.startswith("file://"):
        return Path(url2pathname(unquote(urlparse(directory).path)))
    return Path(directory)


class DefaultDotEnvLoader:
    """Resolve the ``.env`` files of one directory.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / ".env").write_text("PORT=3000", encoding="utf-8")
    >>> files = DefaultDotEnvLoader(tmp.name, mode="development").load()
    >>> [Path(item.path).name for item in files], files[0].contents
    (['.env'], 'PORT=3000')
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        *,
        mode: str | None = None,
        files: Sequence[str] | None = None,
        reader: FileReader = read_text_file,
        environ: Mapping[str, str | None] | None = None,
    ) -> None:
        """Bind the resolver to *directory*.

        Parameters
        ----------
        directory:
            Directory holding the ``.env`` files (path or ``file://`` URL).
        mode:
            Mode used to derive file names. ``None`` falls back to the ambient
            mode read from *environ* (or the process environment).
        files:
            Explicit file names; only their basenames are used and the
            priority derivation is skipped entirely.
        reader:
            Text reader returning ``None`` for absent files.
        environ:
            Environment consulted for the ambient mode.
        """

        self.directory = resolve_directory(directory)
        self._mode = mode
        self._files = list(files) if files is not None else None
        self._reader = reader
        self._environ = environ

    def file_names(self) -> list[str]:
        """Return the candidate names in priority order (highest first)."""

        if self._files is not None:
            return [os.path.basename(name) for name in self._files]
        mode = self._mode if self._mode is not None else default_mode(self._environ)
        return candidate_file_names(mode)

    def load(self) -> list[LoadedEnvFile]:
        """Read every candidate and return the ones that exist, in priority order."""

        loaded: list[LoadedEnvFile] = []
        for path in self._candidate_paths():
            contents = self._read(path)
            if contents is None:
                log_debug("dotenv_file_missing", **make_event("dotenv", path))
                continue
            log_debug("dotenv_file_read", **make_event("dotenv", path, {"size": len(contents)}))
            loaded.append(LoadedEnvFile(path=path, contents=contents))
        return loaded

    def _candidate_paths(self) -> Iterable[str]:
        for name in self.file_names():
            yield str(self.directory / name)

    def _read(self, path: str) -> str | None:
        try:
            return self._reader(path)
        except (OSError, UnicodeDecodeError, NotFound) as exc:
            log_debug("dotenv_file_unreadable", **make_event("dotenv", path, {"error": str(exc)}))
            return None


def load_env(
    directory: str | os.PathLike[str],
    *,
    mode: str | None = None,
    files: Sequence[str] | None = None,
    reader: FileReader = read_text_file,
) -> list[LoadedEnvFile]:
    """Resolve the ``.env`` files of *directory*; shortcut for :class:`DefaultDotEnvLoader`."""

    return DefaultDotEnvLoader(directory, mode=mode, files=files, reader=reader).load()
