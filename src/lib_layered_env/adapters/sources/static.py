"""Static and process-environment sources."""

from __future__ import annotations

from collections.abc import Mapping

from ..env.default import DefaultEnvLoader
from .define import Source, define_source_adapter


@define_source_adapter
def from_object(env: Mapping[str, str | None]) -> Source:
    """Serve the values of *env*; each load returns a fresh copy.

    Useful for defaults and tests.

    Examples
    --------
    >>> source = from_object({"PORT": "4000"})
    >>> first = source.load()
    >>> first["PORT"] = "1"
    >>> source.load()
    {'PORT': '4000'}
    """

    return Source("object", lambda: dict(env))


@define_source_adapter
def from_process_env(environ: Mapping[str, str | None] | None = None) -> Source:
    """Serve a snapshot of the process environment (or of *environ*) taken at load time."""

    loader = DefaultEnvLoader(environ=environ)
    return Source("process-env", loader.load)
