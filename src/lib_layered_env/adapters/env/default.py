"""Process environment adapter.

Purpose
-------
Provide read-only snapshots of the ambient process environment and of the
ambient *mode* (the deployment context such as ``development`` or ``test``).
Every other module receives these as explicit inputs, so this is the only
place that touches :data:`os.environ`.

Key behaviours
--------------
* :func:`process_env` copies :data:`os.environ` at call time; later changes
  to the process never affect a snapshot already taken.
* :func:`default_mode` reads ``APP_ENV`` and falls back to ``NODE_ENV``;
  empty values count as unset.
* :class:`DefaultEnvLoader` wraps an injectable mapping for tests.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from ...observability import log_debug

#: Environment variables consulted, in order, for the ambient mode.
MODE_VARIABLES: Final[tuple[str, ...]] = ("APP_ENV", "NODE_ENV")


def process_env() -> dict[str, str]:
    """Return a copy of the current process environment."""

    return dict(os.environ)


def default_mode(environ: Mapping[str, str | None] | None = None) -> str | None:
    """Return the ambient mode from *environ* (defaults to the process environment).

    Examples
    --------
    >>> default_mode({"NODE_ENV": "production"})
    'production'
    >>> default_mode({"APP_ENV": "staging", "NODE_ENV": "production"})
    'staging'
    >>> default_mode({"APP_ENV": ""}) is None
    True
    """

    source = os.environ if environ is None else environ
    for name in MODE_VARIABLES:
        value = source.get(name)
        if value:
            return value
    return None


class DefaultEnvLoader:
    """Load the variables of an environment mapping as a flat snapshot."""

    def __init__(self, *, environ: Mapping[str, str | None] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`, read at
            :meth:`load` time.
        """

        self._environ = environ

    def load(self) -> dict[str, str | None]:
        """Return a fresh copy of the configured environment.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={"PORT": "3000"})
        >>> snapshot = loader.load()
        >>> snapshot
        {'PORT': '3000'}
        >>> snapshot is loader.load()
        False
        """

        snapshot: dict[str, str | None] = dict(self._environ) if self._environ is not None else dict(process_env())
        log_debug("env_variables_loaded", source="env", path=None, keys=len(snapshot))
        return snapshot
