"""Tagged results returned by schema validation capabilities.

A schema's ``validate`` answers with exactly one of two shapes: :class:`Valid`
carrying the (possibly transformed) value, or :class:`Invalid` carrying one or
more :class:`SchemaIssue` entries. Any schema engine can produce them; the
validator never looks further than the tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class SchemaIssue:
    """A single problem reported by a schema for one value."""

    message: str
    path: tuple[str | int, ...] = ()


@dataclass(frozen=True, slots=True)
class Valid:
    """Successful validation holding the output value."""

    value: Any


@dataclass(frozen=True, slots=True)
class Invalid:
    """Failed validation holding every issue the schema found.

    Examples
    --------
    >>> Invalid.from_messages("Required").issues[0].message
    'Required'
    """

    issues: tuple[SchemaIssue, ...] = field(default_factory=tuple)

    @classmethod
    def from_messages(cls, *messages: str) -> Invalid:
        return cls(tuple(SchemaIssue(message) for message in messages))


SchemaResult = Union[Valid, Invalid]
