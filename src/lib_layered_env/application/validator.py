"""Schema-driven validation of merged environment maps.

Purpose
-------
Run every field of a schema mapping against the merged raw values, collect
all failures, and either return the transformed values or raise one
:class:`~lib_layered_env.domain.errors.EnvValidationError` listing every
failing field.

Contents
--------
* :class:`EnvValidator` – validator bound to one schema mapping.
* :func:`create_validator` – convenience constructor.

System Role
-----------
Called by :func:`lib_layered_env.core.create_env` after the merge. Schemas
are external capabilities (see :class:`lib_layered_env.application.ports.Schema`);
the validator only interprets their tagged results.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from ..domain.env import ValidationIssue
from ..domain.errors import EnvValidationError, UsageError
from ..domain.schema import Invalid, Valid
from ..observability import log_error
from .ports import Schema


class EnvValidator:
    """Validate raw environment values against a mapping of field schemas.

    Examples
    --------
    >>> from lib_layered_env import PydanticSchema
    >>> validator = EnvValidator({"PORT": PydanticSchema(int), "HOST": PydanticSchema(str, default="localhost")})
    >>> validator.validate({"PORT": "3000"})
    {'PORT': 3000, 'HOST': 'localhost'}
    """

    def __init__(self, schema: Mapping[str, Schema]) -> None:
        self._schema = dict(schema)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._schema)

    def validate(self, env: Mapping[str, str | None]) -> dict[str, Any]:
        """Return validated values for every schema field.

        Raises
        ------
        UsageError
            When any schema is asynchronous. Checked for all fields before
            the first one is validated.
        EnvValidationError
            When at least one field failed; carries every issue in schema
            order.
        """

        self._reject_async_schemas()

        result: dict[str, Any] = {}
        issues: list[ValidationIssue] = []
        for key, schema in self._schema.items():
            outcome = _validate_value(schema, env.get(key), key)
            if isinstance(outcome, Valid):
                result[key] = outcome.value
            else:
                issues.extend(ValidationIssue(field=key, message=issue.message) for issue in outcome.issues)

        if issues:
            log_error("validation_failed", fields=sorted({issue.field for issue in issues}), count=len(issues))
            raise EnvValidationError(issues)
        return result

    def _reject_async_schemas(self) -> None:
        for key, schema in self._schema.items():
            if inspect.iscoroutinefunction(getattr(schema, "validate", None)):
                raise UsageError(_async_message(key))


def _validate_value(schema: Schema, value: str | None, key: str) -> Valid | Invalid:
    """Invoke *schema* for one value and normalise the answer into a tagged result."""

    outcome = schema.validate(value)
    if inspect.isawaitable(outcome):
        close = getattr(outcome, "close", None)
        if callable(close):
            close()
        raise UsageError(_async_message(key))
    if isinstance(outcome, (Valid, Invalid)):
        return outcome
    raise UsageError(
        f'Schema for "{key}" returned {type(outcome).__name__}; expected Valid or Invalid.'
    )


def _async_message(key: str) -> str:
    return (
        f'Async validation is not supported. The schema for "{key}" appears to be async. '
        "Please use synchronous schemas only."
    )


def create_validator(schema: Mapping[str, Schema]) -> EnvValidator:
    """Return an :class:`EnvValidator` bound to *schema*."""

    return EnvValidator(schema)
