"""Composition root for ``lib_layered_env``.

Purpose
-------
Provide the entry points that orchestrate file resolution, parsing, source
adapters, merge precedence and validation. This is the only module that
knows both resolution paths and decides which one a call takes.

Contents
--------
* :func:`read_env_raw` – merged raw values plus provenance.
* :func:`create_env` – merged, validated, immutable :class:`Env`.

Resolution paths
----------------
*Directory path* (no ``sources``): ``.env`` files of ``directory`` are parsed
lowest priority first and folded, then the environment source is overlaid
on top unless ``ignore_process_env`` is set. Without a directory only the
environment overlay remains.

*Adapter path* (``sources`` given): adapters are loaded in list order and
folded left to right, so the last adapter wins.

Supplying both ``directory`` and ``sources`` is rejected before any I/O.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Iterable, Sequence, overload

from .adapters.dotenv.default import read_text_file
from .adapters.env.default import process_env
from .adapters.sources import collect_layers, dotenv_layers
from .application.merge import merge_layers
from .application.ports import FileReader, Schema, SourceAdapter
from .application.validator import EnvValidator
from .domain.env import Env, SourceInfo
from .domain.errors import UsageError
from .observability import log_debug, log_info, make_event

PathArgument = str | os.PathLike[str]


async def read_env_raw(
    *,
    directory: PathArgument | None = None,
    sources: Iterable[SourceAdapter] | None = None,
    mode: str | None = None,
    files: Sequence[str] | None = None,
    ignore_process_env: bool = False,
    env_source: Mapping[str, str | None] | None = None,
    reader: FileReader = read_text_file,
) -> tuple[dict[str, str | None], dict[str, SourceInfo]]:
    """Return the merged raw environment and the provenance of every key.

    Parameters
    ----------
    directory:
        Directory whose ``.env`` files are loaded (path or ``file://`` URL).
    sources:
        Explicit adapter list; mutually exclusive with *directory*.
    mode:
        Mode used to pick ``.env.<mode>`` variants; defaults to the ambient
        mode (``APP_ENV``/``NODE_ENV``).
    files:
        Explicit ``.env`` file names overriding the mode-based derivation.
    ignore_process_env:
        Skip the environment overlay and environment lookups during
        interpolation.
    env_source:
        Mapping used instead of the process environment, both for the
        overlay and for interpolation.
    reader:
        Text reader injected into the file resolver.

    Raises
    ------
    UsageError
        When *directory* and *sources* are both supplied, or *files* is
        given without *directory*.

    Examples
    --------
    >>> import asyncio
    >>> from lib_layered_env.adapters.sources import from_object
    >>> merged, meta = asyncio.run(read_env_raw(sources=[from_object({"A": "1", "B": "2"}), from_object({"B": "20"})]))
    >>> merged, meta["B"]["source"]
    ({'A': '1', 'B': '20'}, 'object')
    """

    if directory is not None and sources is not None:
        raise UsageError(
            "Cannot use 'sources' option together with a directory argument. Use from_files() adapter instead."
        )
    if files is not None and directory is None:
        raise UsageError("The 'files' option requires a directory argument.")

    layers: list[tuple[str, Mapping[str, str | None], str | None]] = []
    if sources is not None:
        layers.extend(await collect_layers(sources))
    else:
        if directory is not None:
            layers.extend(
                dotenv_layers(
                    directory,
                    mode=mode,
                    files=files,
                    ignore_process_env=ignore_process_env,
                    env_source=env_source,
                    reader=reader,
                )
            )
        if not ignore_process_env:
            environment = dict(env_source) if env_source is not None else process_env()
            layers.append(("env", environment, None))
            log_debug("layer_loaded", **make_event("env", None, {"keys": len(environment)}))

    if not layers:
        log_info("env_empty", source="none", path=None)
        return {}, {}

    merged, meta = merge_layers(layers)
    log_info("env_merged", source="final", path=None, total_layers=len(layers), keys=len(merged))
    return merged, meta


@overload
async def create_env(
    schema: Mapping[str, Schema],
    /,
    *,
    sources: Iterable[SourceAdapter] | None = ...,
    mode: str | None = ...,
    files: Sequence[str] | None = ...,
    ignore_process_env: bool = ...,
    env_source: Mapping[str, str | None] | None = ...,
    reader: FileReader = ...,
) -> Env: ...


@overload
async def create_env(
    directory: PathArgument,
    schema: Mapping[str, Schema],
    /,
    *,
    sources: Iterable[SourceAdapter] | None = ...,
    mode: str | None = ...,
    files: Sequence[str] | None = ...,
    ignore_process_env: bool = ...,
    env_source: Mapping[str, str | None] | None = ...,
    reader: FileReader = ...,
) -> Env: ...


async def create_env(
    directory_or_schema: Any,
    schema: Mapping[str, Schema] | None = None,
    /,
    *,
    sources: Iterable[SourceAdapter] | None = None,
    mode: str | None = None,
    files: Sequence[str] | None = None,
    ignore_process_env: bool = False,
    env_source: Mapping[str, str | None] | None = None,
    reader: FileReader = read_text_file,
) -> Env:
    """Resolve, merge and validate the environment described by *schema*.

    Call as ``create_env(schema, ...)`` to read the environment only (or an
    adapter list via ``sources``), or as ``create_env(directory, schema, ...)``
    to load the ``.env`` files of *directory* first. Options match
    :func:`read_env_raw`.

    Returns
    -------
    Env
        Immutable snapshot keyed by schema field.

    Raises
    ------
    UsageError
        Conflicting arguments or asynchronous schemas.
    EnvValidationError
        One or more fields failed validation; all of them are listed.

    Examples
    --------
    >>> import asyncio
    >>> from lib_layered_env import PydanticSchema
    >>> env = asyncio.run(create_env({"PORT": PydanticSchema(int)}, env_source={"PORT": "8080"}))
    >>> env.get("PORT"), env.origin("PORT")["source"]
    (8080, 'env')
    """

    directory, fields = _split_arguments(directory_or_schema, schema)
    raw, meta = await read_env_raw(
        directory=directory,
        sources=sources,
        mode=mode,
        files=files,
        ignore_process_env=ignore_process_env,
        env_source=env_source,
        reader=reader,
    )
    values = EnvValidator(fields).validate(raw)
    provenance = {key: meta[key] for key in values if key in meta}
    return Env(values, provenance)


def _split_arguments(
    first: Any, second: Mapping[str, Schema] | None
) -> tuple[PathArgument | None, Mapping[str, Schema]]:
    """Tell the ``(schema)`` form from the ``(directory, schema)`` form."""

    if isinstance(first, (str, os.PathLike)):
        if not isinstance(second, Mapping):
            raise UsageError("create_env(directory, schema): a schema mapping is required after the directory.")
        return first, second
    if isinstance(first, Mapping):
        if second is not None:
            raise UsageError("create_env(schema): unexpected second positional argument.")
        return None, first
    raise UsageError(f"create_env: expected a schema mapping or a directory, got {type(first).__name__}.")


__all__ = [
    "create_env",
    "read_env_raw",
]
