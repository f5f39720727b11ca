"""Application-layer merge policy.

Purpose
-------
Combine an ordered sequence of flat source payloads into one mapping while
tracking which source supplied each key. The module is free of I/O so both
composition paths reuse it.

Contents
    - ``merge_layers``: right-biased overlay fold with provenance.
    - ``overlay``: the same fold without provenance, for callers that only
      need the values.

System Role
-----------
The two resolution paths differ only in how they order their inputs:

* files arrive highest priority first and are reversed before folding, with
  the process environment appended last;
* explicit adapter lists are folded exactly as given.

In both cases the last layer that mentions a key wins, including when the
value it carries is ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable

from ..domain.env import SourceInfo


def merge_layers(
    layers: Iterable[tuple[str, Mapping[str, str | None], str | None]],
) -> tuple[dict[str, str | None], dict[str, SourceInfo]]:
    """Merge *layers* so later entries override earlier ones per key.

    Parameters
    ----------
    layers:
        Iterable of ``(source_name, mapping, source_path)`` tuples ordered
        from lowest to highest precedence.

    Returns
    -------
    tuple[dict[str, str | None], dict[str, SourceInfo]]
        ``(merged, provenance)``; ``provenance`` maps each key to the source
        that supplied its final value.

    Examples
    --------
    >>> merged, meta = merge_layers([
    ...     ("object", {"A": "1", "B": "2"}, None),
    ...     ("json", {"B": "20"}, "/srv/env.json"),
    ... ])
    >>> merged
    {'A': '1', 'B': '20'}
    >>> meta["B"]["source"], meta["A"]["source"]
    ('json', 'object')
    """

    merged: dict[str, str | None] = {}
    meta: dict[str, SourceInfo] = {}
    for source, payload, path in layers:
        for key, value in payload.items():
            merged[key] = value
            meta[key] = SourceInfo(source=source, path=path, key=key)
    return merged, meta


def overlay(*payloads: Mapping[str, str | None]) -> dict[str, str | None]:
    """Fold *payloads* left to right and return only the merged values.

    Examples
    --------
    >>> overlay({"A": "1", "B": "2"}, {"B": "20"})
    {'A': '1', 'B': '20'}
    """

    merged, _ = merge_layers((f"layer-{index}", payload, None) for index, payload in enumerate(payloads))
    return merged
