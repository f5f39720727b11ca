"""Pydantic-backed implementation of the ``Schema`` port.

Purpose
-------
Let callers describe each variable with an ordinary type annotation
(``int``, ``bool``, ``Literal[...]``, ``HttpUrl``, ``Annotated[...]``) and
have :class:`pydantic.TypeAdapter` coerce the raw string.

Behaviour
---------
* A missing value (``None``) is replaced by ``default`` when one is given;
  the default goes through the same validation as a raw value, so
  ``PydanticSchema(int, default="3000")`` yields ``3000``.
* Without a default, a missing value is accepted only when the annotation
  admits ``None``; otherwise the issue reads
  ``Missing required environment variable``.
* Every pydantic error becomes one :class:`SchemaIssue`.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ...domain.schema import Invalid, SchemaIssue, SchemaResult, Valid

MISSING_MESSAGE: Final[str] = "Missing required environment variable"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final[Any] = _Missing()


class PydanticSchema:
    """Validate one environment variable against a type annotation.

    Examples
    --------
    >>> PydanticSchema(int).validate("42")
    Valid(value=42)
    >>> PydanticSchema(int, default="3000").validate(None)
    Valid(value=3000)
    >>> PydanticSchema(str).validate(None).issues[0].message
    'Missing required environment variable'
    """

    def __init__(self, annotation: Any, *, default: Any = MISSING) -> None:
        self.annotation = annotation
        self.default = default
        self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)

    def validate(self, value: Any) -> SchemaResult:
        if value is None and self.default is not MISSING:
            value = self.default
        try:
            return Valid(self._adapter.validate_python(value))
        except PydanticValidationError as exc:
            if value is None:
                return Invalid.from_messages(MISSING_MESSAGE)
            return Invalid(
                tuple(SchemaIssue(message=error["msg"], path=tuple(error["loc"])) for error in exc.errors())
            )

    def __repr__(self) -> str:
        default = "" if self.default is MISSING else f", default={self.default!r}"
        return f"PydanticSchema({self.annotation!r}{default})"
