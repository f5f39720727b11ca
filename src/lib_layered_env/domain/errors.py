"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the parser, the adapters, the validator
and the composition root. The hierarchy lives in the domain layer so outer
layers depend on it and never the other way around.

Contents
--------
* :class:`EnvError` – umbrella base class for every library failure.
* :class:`InvalidFormat` – a structured payload (JSON/TOML) could not be used.
* :class:`UnexpectedRootType` – a JSON root that is not an object (also a ``TypeError``).
* :class:`NotFound` – an optional resource is missing; callers tolerate it.
* :class:`UsageError` – the caller combined options that cannot work together.
* :class:`SourceLoadError` – a source adapter failed in an unexpected way.
* :class:`EnvValidationError` – aggregated per-field validation issues.

System Role
-----------
Only two conditions are tolerated silently (malformed ``.env`` lines and
missing files). Everything else surfaces as one of the types below so callers
can catch :class:`EnvError` to handle all library failures uniformly.
"""

from __future__ import annotations

from typing import Iterable

from .env import ValidationIssue


class EnvError(Exception):
    """Base type for all exceptions emitted by ``lib_layered_env``."""


class InvalidFormat(EnvError, ValueError):
    """Raised when a structured payload cannot be turned into a flat mapping.

    Typical Sources
    ---------------
    :func:`lib_layered_env.adapters.sources.from_json` and
    :func:`lib_layered_env.adapters.sources.from_toml` when the document does
    not parse.
    """


class UnexpectedRootType(InvalidFormat, TypeError):
    """A JSON document parsed, but its root is an array or scalar instead of an object."""


class NotFound(EnvError):
    """Represents missing-but-optional resources (``.env`` files, JSON files).

    The file resolver treats this as a non-fatal condition and simply omits
    the candidate.
    """


class UsageError(EnvError, TypeError):
    """Signals an API misuse detected before any I/O or validation happens.

    Raised when a directory and an explicit adapter list are both supplied, or
    when a schema turns out to be asynchronous.
    """


class SourceLoadError(EnvError):
    """Raised when a source adapter fails with a non-library exception.

    Attributes
    ----------
    source:
        Name of the adapter whose ``load()`` raised.
    """

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source


class EnvValidationError(EnvError):
    """Aggregated validation failure carrying every failing field.

    Why
    ----
    Reporting all broken variables at once saves operators a fix-and-retry
    loop per variable.

    Examples
    --------
    >>> error = EnvValidationError([ValidationIssue(field="PORT", message="Required")])
    >>> error.issues[0].field, str(error)
    ('PORT', 'Environment variables validation failed: PORT: Required')
    """

    def __init__(self, issues: Iterable[ValidationIssue], message: str | None = None) -> None:
        self.issues: tuple[ValidationIssue, ...] = tuple(issues)
        super().__init__(message or _summarise(self.issues))


def _summarise(issues: tuple[ValidationIssue, ...]) -> str:
    """Render *issues* into a single human readable line."""

    base = "Environment variables validation failed"
    if not issues:
        return base
    details = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
    return f"{base}: {details}"
