"""Source adapter building blocks.

Purpose
-------
Give built-in and caller-defined sources one shape: a :class:`Source` with a
``name`` and a ``load`` callable that may be synchronous or asynchronous.
:func:`resolve_adapters` folds a list of them left to right.

Contents
--------
* :class:`Source` – dataclass implementation of the ``SourceAdapter`` port.
* :func:`define_source_adapter` – typed decorator for adapter factories.
* :func:`load_source` – call one adapter, awaiting when needed.
* :func:`collect_layers` / :func:`resolve_adapters` – the explicit-list merge.

Examples
--------
>>> import asyncio
>>> @define_source_adapter
... def constant(value: str) -> Source:
...     return Source("constant", lambda: {"VALUE": value})
>>> asyncio.run(resolve_adapters([constant("a"), constant("b")]))
{'VALUE': 'b'}
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, TypeVar, Union

from ...application.merge import merge_layers
from ...application.ports import EnvMapping, SourceAdapter
from ...domain.errors import EnvError, SourceLoadError
from ...observability import log_debug, make_event

F = TypeVar("F", bound=Callable[..., SourceAdapter])

Loader = Callable[[], Union[EnvMapping, Awaitable[EnvMapping]]]


@dataclass(frozen=True)
class Source:
    """A named source whose values come from *loader*."""

    name: str
    loader: Loader

    def load(self) -> Union[EnvMapping, Awaitable[EnvMapping]]:
        return self.loader()


def define_source_adapter(factory: F) -> F:
    """Mark *factory* as a source adapter factory and return it unchanged.

    The decorator exists for readability and type inference; factories take
    their options and return an object satisfying the ``SourceAdapter`` port.
    """

    return factory


async def load_source(adapter: SourceAdapter) -> dict[str, str | None]:
    """Call ``adapter.load()``, await the result when needed, and copy it.

    Raises
    ------
    SourceLoadError
        When the adapter fails with an exception outside the library
        taxonomy. :class:`EnvError` subclasses propagate unchanged.
    """

    try:
        values = adapter.load()
        if inspect.isawaitable(values):
            values = await values
    except EnvError:
        raise
    except Exception as exc:
        raise SourceLoadError(adapter.name, f'Source "{adapter.name}" failed to load: {exc}') from exc
    if not isinstance(values, Mapping):
        raise SourceLoadError(
            adapter.name, f'Source "{adapter.name}" returned {type(values).__name__}; expected a mapping'
        )
    log_debug("source_loaded", **make_event(adapter.name, None, {"keys": len(values)}))
    return dict(values)


async def collect_layers(
    adapters: Iterable[SourceAdapter],
) -> list[tuple[str, dict[str, str | None], str | None]]:
    """Load *adapters* strictly in order and return them as merge layers."""

    layers: list[tuple[str, dict[str, str | None], str | None]] = []
    for adapter in adapters:
        layers.append((adapter.name, await load_source(adapter), None))
    return layers


async def resolve_adapters(adapters: Iterable[SourceAdapter]) -> dict[str, str | None]:
    """Merge *adapters* left to right; the last adapter wins per key."""

    merged, _ = merge_layers(await collect_layers(adapters))
    return merged
