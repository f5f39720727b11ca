"""`.env` files source.

Wraps the file resolver and the parser into one adapter. The same layer
builder backs the implicit directory path of
:func:`lib_layered_env.core.read_env_raw`, so both produce identical results
for the files themselves.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Sequence

from ...application.merge import merge_layers
from ...application.ports import FileReader
from ...observability import log_debug, make_event
from ..dotenv.default import DefaultDotEnvLoader, read_text_file
from ..dotenv.parser import EnvParser
from .define import Source, define_source_adapter


def dotenv_layers(
    directory: str | os.PathLike[str],
    *,
    mode: str | None = None,
    files: Sequence[str] | None = None,
    ignore_process_env: bool = False,
    env_source: Mapping[str, str | None] | None = None,
    reader: FileReader = read_text_file,
) -> list[tuple[str, dict[str, str], str | None]]:
    """Return the parsed ``.env`` files of *directory* as merge layers, lowest priority first.

    ``env_source`` doubles as the environment consulted for the ambient mode
    when *mode* is not given.
    """

    environ = dict(env_source) if env_source is not None else None
    loader = DefaultDotEnvLoader(directory, mode=mode, files=files, reader=reader, environ=environ)
    layers: list[tuple[str, dict[str, str], str | None]] = []
    for loaded in reversed(loader.load()):
        parsed = EnvParser(loaded.contents, ignore_process_env=ignore_process_env, env_source=env_source).parse()
        log_debug("dotenv_parsed", **make_event("dotenv", loaded.path, {"keys": len(parsed)}))
        layers.append(("dotenv", parsed, loaded.path))
    return layers


@define_source_adapter
def from_files(
    directory: str | os.PathLike[str],
    *,
    mode: str | None = None,
    files: Sequence[str] | None = None,
    ignore_process_env: bool = False,
    env_source: Mapping[str, str | None] | None = None,
    reader: FileReader = read_text_file,
) -> Source:
    """Serve the merged ``.env`` files of *directory*; empty when none exist.

    Examples
    --------
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / ".env").write_text("V=base", encoding="utf-8")
    >>> _ = (Path(tmp.name) / ".env.development").write_text("V=dev", encoding="utf-8")
    >>> from_files(tmp.name, mode="development").load()
    {'V': 'dev'}
    >>> tmp.cleanup()
    """

    def _load() -> dict[str, str | None]:
        layers = dotenv_layers(
            directory,
            mode=mode,
            files=files,
            ignore_process_env=ignore_process_env,
            env_source=env_source,
            reader=reader,
        )
        merged, _ = merge_layers(layers)
        return merged

    return Source("files", _load)
