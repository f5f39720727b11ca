"""Application-layer ports describing the collaborators of the pipeline.

Purpose
-------
Define the structural contracts that adapters and caller-supplied objects
must satisfy so the composition root can orchestrate them without importing
concrete implementations.

Contents
--------
* :class:`Schema` – external validation capability for one variable.
* :class:`SourceAdapter` – named provider of a flat key/value mapping.
* :class:`FileReader` – "read text file, return contents or ``None``".
* :class:`FileLoader` – parses a flat JSON/TOML document into a mapping.
* :class:`DotEnvLoader` – resolves ``.env`` candidates for a directory.
* :class:`Merger` – folds source payloads into one mapping plus provenance.

System Role
-----------
These protocols are ``runtime_checkable`` so contract tests can assert that
the built-in adapters satisfy them.
"""

from __future__ import annotations

from typing import Any, Awaitable, Iterable, Mapping, Protocol, Union, runtime_checkable

from ..domain.env import LoadedEnvFile, SourceInfo
from ..domain.schema import SchemaResult

#: Flat mapping produced by every source. ``None`` marks an absent variable.
EnvMapping = Mapping[str, Union[str, None]]


@runtime_checkable
class Schema(Protocol):
    """Validate one raw value (``str`` or ``None``) and return a tagged result.

    Implementations must answer synchronously; asynchronous schemas are
    rejected by the validator.
    """

    def validate(self, value: Any) -> SchemaResult: ...


@runtime_checkable
class SourceAdapter(Protocol):
    """A named, independently loadable provider of environment values.

    ``load`` may return the mapping directly or an awaitable resolving to it.
    """

    name: str

    def load(self) -> Union[EnvMapping, Awaitable[EnvMapping]]: ...


@runtime_checkable
class FileReader(Protocol):
    """Return the text of *path*, or ``None`` when the file does not exist."""

    def __call__(self, path: str) -> str | None: ...


@runtime_checkable
class FileLoader(Protocol):
    """Parse the structured document at *path* into a flat mapping.

    Raises ``NotFound`` for missing files and ``InvalidFormat`` for malformed ones.
    """

    def load(self, path: str) -> dict[str, str | None]: ...


@runtime_checkable
class DotEnvLoader(Protocol):
    """Resolve the ``.env`` candidates of one directory, highest priority first."""

    def file_names(self) -> list[str]: ...

    def load(self) -> list[LoadedEnvFile]: ...


@runtime_checkable
class Merger(Protocol):
    """Fold ``(source, mapping, path)`` layers, later layers overriding earlier ones."""

    def __call__(
        self, layers: Iterable[tuple[str, EnvMapping, str | None]]
    ) -> tuple[dict[str, str | None], dict[str, SourceInfo]]: ...
