"""JSON and TOML document sources.

Both read a flat table of variables through the structured loaders. A
missing document yields an empty mapping; malformed content raises
:class:`~lib_layered_env.domain.errors.InvalidFormat`.
"""

from __future__ import annotations

import os

from ...application.ports import FileLoader
from ...domain.errors import NotFound
from ..dotenv.default import resolve_directory
from ..file_loaders.structured import JSONFileLoader, TOMLFileLoader
from .define import Source, define_source_adapter


def _document_source(name: str, path: str | os.PathLike[str], loader: FileLoader) -> Source:
    file_path = str(resolve_directory(path))

    def _load() -> dict[str, str | None]:
        try:
            return loader.load(file_path)
        except NotFound:
            return {}

    return Source(name, _load)


@define_source_adapter
def from_json(path: str | os.PathLike[str]) -> Source:
    """Serve the variables of a flat JSON object stored at *path*.

    Examples
    --------
    >>> from_json("/definitely/not/here.json").load()
    {}
    """

    return _document_source("json", path, JSONFileLoader())


@define_source_adapter
def from_toml(path: str | os.PathLike[str]) -> Source:
    """Serve the top-level keys of the TOML document stored at *path*."""

    return _document_source("toml", path, TOMLFileLoader())
