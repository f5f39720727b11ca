"""Domain-level value objects for resolved environments.

Purpose
-------
Anchor the immutable :class:`Env` snapshot returned to callers together with
the small records that travel through the pipeline. The module performs no
I/O and knows nothing about adapters.

Contents
--------
* :class:`SourceInfo` – which source supplied a raw key (source, path, key).
* :class:`LoadedEnvFile` – one resolved ``.env`` candidate and its contents.
* :class:`ValidationIssue` – one failing field reported by the validator.
* :class:`Env` – ``Mapping`` implementation exposing ``get``/``all``/``has``
  plus provenance lookups.
* :data:`EMPTY_ENV` – canonical empty snapshot.

System Role
-----------
Every call to :func:`lib_layered_env.core.create_env` ends in an :class:`Env`.
The type guarantees immutability: later changes to the sources that produced
it never leak into an existing snapshot.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, TypedDict, TypeVar, overload


class SourceInfo(TypedDict):
    """Describe the origin of a merged raw key.

    Attributes
    ----------
    source:
        Name of the layer or adapter (``"dotenv"``, ``"env"``, ``"json"`` ...).
    path:
        File that produced the key, ``None`` for in-memory sources.
    key:
        The raw variable name.
    """

    source: str
    path: str | None
    key: str


@dataclass(frozen=True, slots=True)
class LoadedEnvFile:
    """A ``.env`` candidate that resolved successfully.

    Created by the file resolver, consumed once by the parser and not retained
    after the merge.
    """

    path: str
    contents: str


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One failing schema field and the message explaining why."""

    field: str
    message: str


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Env(Mapping[str, Any]):
    """Immutable mapping of validated environment values.

    Why
    ----
    Callers want a read-only, dictionary-like view of their validated settings
    that cannot drift after start-up.

    What
    ----
    Stores the validated values and the provenance of the raw keys inside
    ``MappingProxyType`` instances and implements the :class:`Mapping`
    protocol on top of them.

    Examples
    --------
    >>> env = Env({"PORT": 3000, "DEBUG": None}, {"PORT": {"source": "dotenv", "path": "/srv/.env", "key": "PORT"}})
    >>> env.get("PORT")
    3000
    >>> env.has("DEBUG"), env.has("PORT")
    (False, True)
    >>> env.origin("PORT")["source"]
    'dotenv'
    """

    _values: Mapping[str, Any]
    _meta: Mapping[str, SourceInfo]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_values", _freeze_mapping(self._values))
        object.__setattr__(self, "_meta", _freeze_mapping(self._meta))

    @classmethod
    async def create(cls, *args: Any, **options: Any) -> Env:
        """Resolve, validate and wrap an environment; see :func:`lib_layered_env.core.create_env`.

        Examples
        --------
        >>> import asyncio
        >>> from lib_layered_env import PydanticSchema
        >>> env = asyncio.run(Env.create({"HOST": PydanticSchema(str, default="localhost")}, env_source={}))
        >>> env.get("HOST")
        'localhost'
        """

        from ..core import create_env

        return await create_env(*args, **options)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @overload
    def get(self, key: str, default: T) -> Any | T: ...

    @overload
    def get(self, key: str, default: None = ...) -> Any | None: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Return the validated value for *key* or *default* when the field is unknown."""

        return self._values.get(key, default)

    def all(self) -> dict[str, Any]:
        """Return a mutable shallow copy of every validated value.

        Examples
        --------
        >>> env = Env({"A": "1"}, {})
        >>> copy = env.all()
        >>> copy["A"] = "2"
        >>> env["A"]
        '1'
        """

        return dict(self._values)

    def has(self, key: str) -> bool:
        """Return ``True`` when *key* is a schema field with a non-``None`` value."""

        return self._values.get(key) is not None

    def origin(self, key: str) -> SourceInfo | None:
        """Return the provenance of the raw variable behind *key*, if any source set it."""

        return self._meta.get(key)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the validated values to JSON, stringifying anything JSON cannot encode.

        Examples
        --------
        >>> Env({"PORT": 3000}, {}).to_json()
        '{"PORT":3000}'
        """

        return json.dumps(self.all(), indent=indent, separators=(",", ":"), ensure_ascii=False, default=str)


def _freeze_mapping(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return an immutable proxy around a private copy of *mapping*."""

    return MappingProxyType(dict(mapping))


#: Shared empty snapshot; safe to re-use because :class:`Env` is immutable.
EMPTY_ENV = Env(MappingProxyType({}), MappingProxyType({}))

__all__ = [
    "EMPTY_ENV",
    "Env",
    "LoadedEnvFile",
    "SourceInfo",
    "ValidationIssue",
]
